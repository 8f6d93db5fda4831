import base64
import gc
import logging
import time

import matplotlib.pyplot as plt
from flask import Blueprint, jsonify, request

from backend.services.encoding import encode_animation_bytes
from backend.services.system import log_mem
from backend.services.visuals import animator_config_from, create_bar_animation_wrapper
from carstats.visuals.core import constants

logger = logging.getLogger(__name__)

bp = Blueprint("animations", __name__)


@bp.route("/generate_animation", methods=["POST"])
def generate_animation():
    """Generate a GIF bar-race animation of brand output.

    Expects a JSON body with (all optional):
    - top_n (int): Number of bars to display.
    - tick_ms (int): Milliseconds per snapshot.
    - jitter_fraction (float): Tie tolerance relative to the tick max.
    - limit_bar_stretch (bool): Shrink the drawing area when few bars show.
    - max_bar_height, min_bar_gap (float): Bar geometry for the stretch limit.
    - interp_steps (int): Frames per snapshot. Defaults to 12.
    - dpi (int): Render DPI. Defaults to 80.

    Returns:
        flask.Response: JSON containing base64-encoded GIF under key "video"
        and a suggested filename under key "filename". Returns 400 on bad
        options, or 500 with an error message on failure.
    """
    try:
        t0 = time.time()
        log_mem("Start /generate_animation")
        data = request.get_json(silent=True) or {}
        animator_config = animator_config_from(data)
        interp_steps = int(data.get("interp_steps", constants.interp_steps))
        dpi = int(data.get("dpi", constants.dpi))
        if not 1 <= interp_steps <= 60 or not 10 <= dpi <= 200:
            raise ValueError("interp_steps must be 1-60 and dpi 10-200")
        fps = max(1, round(1000 * interp_steps / animator_config.tick_ms))

        anim = create_bar_animation_wrapper(animator_config, interp_steps, dpi)
        t1 = time.time()
        logger.info("Frame setup time: %.2f seconds", t1 - t0)
        log_mem("After create_bar_animation")

        video_bytes = encode_animation_bytes(anim, fps)
        t2 = time.time()
        logger.info("Encoding (pillow) time: %.2f seconds", t2 - t1)

        video_base64 = base64.b64encode(video_bytes).decode("utf-8")
        filename = f"brand_output_top_{animator_config.top_n}_animation.gif"

        del anim
        plt.close("all")
        gc.collect()
        return jsonify({"video": video_base64, "filename": filename}), 200

    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.exception("animation generation failed")
        return jsonify({"error": f"Animation generation failed: {str(e)}"}), 500
