"""Donut chart of brand shares in the world fleet."""

import matplotlib.pyplot as plt

from carstats.data.tables import WorldTotals
from carstats.visuals.core import constants
from carstats.visuals.core.colors import PALETTE
from carstats.visuals.core.formatting import format_number


def plot_brand_shares(
    totals: WorldTotals,
    figsize: tuple[float, float] = (9, 6),
    dpi: int = 100,
) -> plt.Figure:
    """Donut of absolute brand counts, labelled ``name pct%``."""
    brands = totals.brands
    values = [brand.value for brand in brands]
    grand = sum(values) or 1

    fig, ax = plt.subplots(figsize=figsize, dpi=dpi)
    fig.patch.set_facecolor(constants.facecolor)
    wedges, _ = ax.pie(
        values,
        labels=[f"{b.name} {b.value / grand * 100:.0f}%" for b in brands],
        colors=[PALETTE[i % len(PALETTE)] for i in range(len(brands))],
        startangle=90,
        counterclock=False,
        wedgeprops={"width": 0.53, "edgecolor": constants.facecolor, "linewidth": 1},
        textprops={"fontsize": 9},
    )
    ax.set_aspect("equal")
    ax.legend(
        wedges,
        [b.name for b in brands],
        loc="center left",
        bbox_to_anchor=(1.05, 0.5),
        frameon=False,
        fontsize=9,
    )
    ax.text(
        0,
        0,
        f"{format_number(totals.total_cars)}\ncars",
        ha="center",
        va="center",
        fontsize=11,
        weight="bold",
    )
    return fig
