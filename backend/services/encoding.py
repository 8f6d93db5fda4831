import logging
import os
import tempfile
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.animation import PillowWriter

logger = logging.getLogger(__name__)


def encode_animation(anim, out_path: str, fps: int) -> None:
    """
    Encode the animation to a GIF with Pillow.
    Always closes the animation's figure.
    """
    fig: Optional[plt.Figure] = getattr(anim, "_fig", None)
    try:
        logger.info("encode_animation start fps=%s out=%s", fps, out_path)
        anim.save(out_path, writer=PillowWriter(fps=fps))
    finally:
        if fig is not None:
            plt.close(fig)
        logger.info("encode_animation end -> %s", out_path)


def encode_animation_bytes(anim, fps: int) -> bytes:
    """Encode to a temporary GIF and return its bytes."""
    with tempfile.NamedTemporaryFile(delete=False, suffix=".gif") as temp_file:
        temp_path = temp_file.name
    try:
        encode_animation(anim, temp_path, fps)
        with open(temp_path, "rb") as f:
            return f.read()
    finally:
        os.remove(temp_path)
