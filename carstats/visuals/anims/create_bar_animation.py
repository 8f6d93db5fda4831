"""
This module builds the bar chart race as a matplotlib animation.
The animator is driven offline by a manual clock; each tick's render plan is
expanded into ``interp_steps`` interpolated frames and drawn with
``draw_frame``.
"""

import logging
import time
from typing import Sequence

import matplotlib.animation as animation

from carstats.data.series import Snapshot
from carstats.visuals.anims.animator import AnimatorConfig, RankedSeriesAnimator, RenderPlan
from carstats.visuals.anims.timers import ManualClock
from carstats.visuals.anims.transitions import Frame, tick_frames
from carstats.visuals.core import constants
from carstats.visuals.core.colors import OrdinalColors
from carstats.visuals.plots.create_bar_plot import draw_frame, new_race_figure

logger = logging.getLogger(__name__)


def collect_plans(
    series: Sequence[Snapshot], config: AnimatorConfig | None = None
) -> list[RenderPlan]:
    """Play the whole series with a manual clock and return every render plan."""
    plans: list[RenderPlan] = []
    clock = ManualClock()
    animator = RankedSeriesAnimator(
        series, config, interval_factory=clock, on_render=plans.append
    )
    animator.start()
    while animator.state.running:
        clock.advance()
    animator.close()
    return plans


def precompute_frames(
    series: Sequence[Snapshot],
    config: AnimatorConfig | None = None,
    interp_steps: int = constants.interp_steps,
) -> tuple[list[Frame], list[str]]:
    """Interpolated frames for the whole playback, plus the label order for colors."""
    start_time = time.time()
    plans = collect_plans(series, config)
    frames = [frame for plan in plans for frame in tick_frames(plan, interp_steps)]
    labels = list(plans[0].labels) if plans else []
    logger.debug(
        "precompute_frames: %s ticks -> %s frames (%.2f seconds)",
        len(plans),
        len(frames),
        time.time() - start_time,
    )
    return frames, labels


def create_bar_animation(
    series: Sequence[Snapshot],
    config: AnimatorConfig | None = None,
    interp_steps: int = constants.interp_steps,
    dpi: int = constants.dpi,
    figsize: tuple[float, float] = constants.figsize,
    title: str | None = None,
) -> animation.FuncAnimation:
    """Prepare the bar chart race animation.

    Args:
        series: Ordered snapshots.
        config: Animator settings; ``tick_ms`` sets the playback speed.
        interp_steps: Frames per tick.
        dpi: Render DPI.
        figsize: Figure size in inches.
        title: Optional heading.

    Returns:
        matplotlib.animation.FuncAnimation: The configured animation. An empty
        series yields a single empty frame.
    """
    config = config or AnimatorConfig()
    frames, labels = precompute_frames(series, config, interp_steps)
    fig, ax, timestamp_text = new_race_figure(figsize, dpi, title)
    colors = OrdinalColors(labels)

    def animate(i: int):
        if frames:
            draw_frame(ax, frames[i], colors, timestamp_text)
        return []

    interval = config.tick_ms / max(1, interp_steps)
    return animation.FuncAnimation(
        fig,
        animate,
        frames=max(1, len(frames)),
        interval=interval,
        blit=False,
        repeat=False,
    )
