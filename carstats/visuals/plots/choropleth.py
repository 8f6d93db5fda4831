"""Choropleth world map of registered cars per country."""

from typing import Mapping

import matplotlib.pyplot as plt
from matplotlib.collections import PatchCollection
from matplotlib.patches import Polygon, Rectangle

from carstats.data.tables import COUNTRY_CARS, SOURCE_NAME
from carstats.visuals.core import constants
from carstats.visuals.core.colors import choropleth_rgb
from carstats.visuals.core.formatting import format_number
from carstats.visuals.core.style import setup_map_style
from carstats.visuals.io.geometry import Region


def region_value(region: Region, values: Mapping[str, float]) -> float:
    """Value for a region, falling back to its unnormalized name."""
    return values.get(region.name) or values.get(region.source_name) or 0


def plot_choropleth(
    regions: Mapping[str, Region],
    values: Mapping[str, float] = COUNTRY_CARS,
    figsize: tuple[float, float] = (12, 6.5),
    dpi: int = 100,
) -> plt.Figure:
    """Fill each region on the blue ramp by its share of the largest value.

    Args:
        regions: Outlines keyed by normalized name.
        values: Country -> cars. Keys without a region still count in the total.
        figsize, dpi: Figure geometry.

    Returns:
        matplotlib.figure.Figure: Map with the total and a few/many legend.
    """
    max_value = max(values.values(), default=0)
    fig, ax = plt.subplots(figsize=figsize, dpi=dpi)
    fig.patch.set_facecolor(constants.facecolor)
    setup_map_style(ax)

    patches, facecolors = [], []
    for region in regions.values():
        color = choropleth_rgb(region_value(region, values), max_value)
        for ring in region.rings:
            patches.append(Polygon(ring, closed=True))
            facecolors.append(color)
    ax.add_collection(
        PatchCollection(
            patches, facecolors=facecolors, edgecolors="#cbd5e1", linewidths=0.3
        )
    )

    fig.text(
        0.02,
        0.04,
        f"Total cars: {format_number(sum(values.values()))}\nSource: {SOURCE_NAME}",
        ha="left",
        va="bottom",
        fontsize=9,
        color="#475569",
    )
    for x, label, value in ((0.80, "few", 1), (0.88, "many", max_value)):
        fig.add_artist(
            Rectangle(
                (x, 0.05),
                0.012,
                0.022,
                transform=fig.transFigure,
                facecolor=choropleth_rgb(value, max_value),
                edgecolor="#94a3b8",
                linewidth=0.5,
            )
        )
        fig.text(x + 0.016, 0.061, label, va="center", fontsize=9, color="#475569")
    return fig
