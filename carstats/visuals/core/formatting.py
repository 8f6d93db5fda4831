"""Number formatting shared by race labels, axis ticks and stat captions."""

import math


def format_value(value: float) -> str:
    """Compact label for race values: ``1.2M``, ``12.5K`` or a plain integer."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    # half-up: 2.5 -> "3"
    return str(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """Thousands-separated integer, e.g. ``45,421,468``."""
    return f"{value:,.0f}"
