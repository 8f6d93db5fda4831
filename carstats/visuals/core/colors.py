"""Color utilities for visuals."""

import colorsys

# d3 category10, extended for the pie's twelve segments
PALETTE: tuple[str, ...] = (
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
    "#9edae5",
    "#c5b0d5",
)

NO_DATA_COLOR = "#f8fafc"
CHOROPLETH_HUE = 220


def hex_to_rgb(value: str) -> tuple[float, float, float]:
    """Convert ``#rrggbb`` to a matplotlib RGB tuple (0-1 each)."""
    value = value.lstrip("#")
    return tuple(int(value[i : i + 2], 16) / 255 for i in (0, 2, 4))


def hsl_to_rgb(h: float, s: float, lightness: float) -> tuple[float, float, float]:
    """Convert CSS-style HSL (degrees, percent, percent) to RGB (0-1 each)."""
    return colorsys.hls_to_rgb(h / 360, lightness / 100, s / 100)


def choropleth_lightness(value: float | None, max_value: float) -> float | None:
    """Lightness (percent) for a country value, or None when there is no data.

    Lightness falls linearly from 90% for tiny values to 30% for the maximum.
    """
    if not value:
        return None
    ratio = value / max(1, max_value)
    return 90 - ratio * 60


def choropleth_color(value: float | None, max_value: float) -> str:
    """CSS color for a country value on the blue choropleth ramp."""
    lightness = choropleth_lightness(value, max_value)
    if lightness is None:
        return NO_DATA_COLOR
    return f"hsl({CHOROPLETH_HUE}, 100%, {lightness:g}%)"


def choropleth_rgb(value: float | None, max_value: float) -> tuple[float, float, float]:
    """Same ramp as :func:`choropleth_color`, as an RGB tuple for matplotlib."""
    lightness = choropleth_lightness(value, max_value)
    if lightness is None:
        return hex_to_rgb(NO_DATA_COLOR)
    return hsl_to_rgb(CHOROPLETH_HUE, 100, lightness)


class OrdinalColors:
    """Assign palette colors to labels in first-seen order, cycling the palette.

    Args:
        domain: Optional labels to pre-assign, in order.
        palette: Colors to cycle through.
    """

    def __init__(self, domain=(), palette: tuple[str, ...] = PALETTE) -> None:
        self.palette = palette
        self._assigned: dict[str, str] = {}
        for label in domain:
            self(label)

    def __call__(self, label: str) -> str:
        if label not in self._assigned:
            self._assigned[label] = self.palette[
                len(self._assigned) % len(self.palette)
            ]
        return self._assigned[label]
