"""Visuals package public API.
This module re-exports key functions and constants from submodules
to provide a simplified interface.
"""

from .anims.animator import AnimatorConfig, RankedSeriesAnimator, RenderPlan
from .anims.create_bar_animation import create_bar_animation
from .anims.transitions import frame_at
from .core.cache import geometry_cache
from .core.colors import OrdinalColors, choropleth_color
from .core.constants import dpi, figsize, interp_steps, tick_ms, top_n
from .core.formatting import format_number, format_value
from .io.geometry import load_regions
from .plots.choropleth import plot_choropleth
from .plots.create_bar_plot import plot_frame
from .plots.pie import plot_brand_shares

__all__ = [
    "dpi",
    "figsize",
    "interp_steps",
    "tick_ms",
    "top_n",
    "geometry_cache",
    "AnimatorConfig",
    "RankedSeriesAnimator",
    "RenderPlan",
    "OrdinalColors",
    "choropleth_color",
    "create_bar_animation",
    "format_number",
    "format_value",
    "frame_at",
    "load_regions",
    "plot_brand_shares",
    "plot_choropleth",
    "plot_frame",
]
