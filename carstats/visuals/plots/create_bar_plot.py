"""Static rendering of one race frame with matplotlib.

``draw_frame`` is the drawing surface used by both the exported animation and
the interactive player; ``plot_frame`` wraps it into a standalone figure.
"""

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from carstats.visuals.anims.animator import RenderPlan
from carstats.visuals.anims.axis import axis_ticks
from carstats.visuals.anims.transitions import Frame, frame_at
from carstats.visuals.core import constants
from carstats.visuals.core.colors import OrdinalColors
from carstats.visuals.core.formatting import format_value
from carstats.visuals.core.style import setup_bar_plot_style

# value labels switch inside the bar from this size on
INSIDE_LABEL_FROM = 1_000_000


def draw_frame(
    ax: plt.Axes,
    frame: Frame,
    colors: OrdinalColors,
    timestamp_text=None,
) -> None:
    """Draw ``frame`` onto ``ax`` (cleared first).

    Args:
        ax: Axes set up by ``setup_bar_plot_style``.
        frame: Interpolated frame from ``frame_at``.
        colors: Label -> color mapping, stable across frames.
        timestamp_text: Optional figure text artist updated with the timestamp.
    """
    ax.clear()
    setup_bar_plot_style(ax, frame.width, constants.inner_height)

    ticks = axis_ticks(frame.axis_max) if frame.axis_max else []
    ax.set_xticks([tick / frame.axis_max * frame.width for tick in ticks])
    ax.set_xticklabels([format_value(tick) for tick in ticks])
    for tick in ticks[1:]:
        x = tick / frame.axis_max * frame.width
        ax.axvline(x, color="white", linewidth=1, zorder=0)

    # lower ranks last so they sit on top while overtaking
    for bar in sorted(frame.bars, key=lambda b: (b.rank is None, -(b.rank or 0))):
        ax.add_patch(
            Rectangle(
                (0, bar.y),
                bar.width,
                bar.height,
                facecolor=colors(bar.label),
                edgecolor="none",
                alpha=bar.opacity,
            )
        )
        center = bar.y + bar.height / 2
        ax.text(
            -6,
            center,
            bar.label,
            ha="right",
            va="center",
            fontsize=9,
            alpha=bar.opacity,
            clip_on=False,
        )
        inside = bar.value >= INSIDE_LABEL_FROM
        ax.text(
            bar.width - 4 if inside else bar.width + 4,
            center,
            bar.text,
            ha="right" if inside else "left",
            va="center",
            fontsize=9,
            color="white" if inside else "#333333",
            alpha=bar.opacity,
            clip_on=False,
        )

    if timestamp_text is not None:
        timestamp_text.set_text("" if frame.timestamp is None else str(frame.timestamp))


def new_race_figure(
    figsize: tuple[float, float] = constants.figsize,
    dpi: int = constants.dpi,
    title: str | None = None,
):
    """Figure with the race axes placed inside the page margins.

    Returns:
        ``(fig, ax, timestamp_text)``
    """
    m = constants.margin
    fig = plt.figure(figsize=figsize, dpi=dpi)
    fig.patch.set_facecolor(constants.facecolor)
    ax = fig.add_axes(
        [
            m["left"] / constants.svg_width,
            m["bottom"] / constants.svg_height,
            constants.inner_width / constants.svg_width,
            constants.inner_height / constants.svg_height,
        ]
    )
    setup_bar_plot_style(ax)
    timestamp_text = fig.text(
        (m["left"] + constants.inner_width / 2) / constants.svg_width,
        1 - (m["top"] / 2) / constants.svg_height,
        "",
        ha="center",
        va="center",
        fontsize=20,
        color="#333333",
    )
    if title:
        fig.text(0.01, 0.98, title, ha="left", va="top", fontsize=12, weight="bold")
    return fig, ax, timestamp_text


def plot_frame(
    plan: RenderPlan,
    progress: float = 1.0,
    figsize: tuple[float, float] = constants.figsize,
    dpi: int = constants.dpi,
    title: str | None = None,
) -> plt.Figure:
    """Render one plan at ``progress`` as a standalone figure (e.g. the final frame)."""
    fig, ax, timestamp_text = new_race_figure(figsize, dpi, title)
    colors = OrdinalColors(plan.labels)
    draw_frame(ax, frame_at(plan, progress), colors, timestamp_text)
    return fig
