"""Plot styling helpers for visuals."""

import matplotlib.pyplot as plt

from carstats.visuals.core import constants


def setup_bar_plot_style(
    ax: plt.Axes,
    width: float = constants.inner_width,
    height: float = constants.inner_height,
) -> None:
    """Style an axes as the race's drawing area, in pixel units, y pointing down."""
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_visible(False)
    ax.spines["left"].set_visible(False)
    ax.set_facecolor(constants.facecolor)
    ax.xaxis.tick_top()
    ax.tick_params(axis="x", which="both", length=0, labelsize=9, colors="#555555")
    ax.set_yticks([])
    ax.margins(x=0, y=0)


def setup_map_style(ax: plt.Axes) -> None:
    ax.set_axis_off()
    ax.set_aspect("equal")
    ax.set_xlim(-180, 180)
    ax.set_ylim(-60, 85)
