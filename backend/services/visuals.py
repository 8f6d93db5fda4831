from backend.core import config
from carstats.data.series import Series, load_series
from carstats.data.tables import COUNTRY_CARS, world_totals
from carstats.visuals.anims.animator import AnimatorConfig
from carstats.visuals.anims.create_bar_animation import collect_plans, create_bar_animation
from carstats.visuals.io.geometry import load_regions
from carstats.visuals.plots.choropleth import plot_choropleth
from carstats.visuals.plots.create_bar_plot import plot_frame
from carstats.visuals.plots.pie import plot_brand_shares

_series_cache: dict[str, Series] = {}

# request key -> (config field, type, minimum, maximum)
_CONFIG_FIELDS = {
    "tick_ms": ("tick_ms", int, 50, 10_000),
    "top_n": ("top_n", int, 1, 100),
    "jitter_fraction": ("jitter_fraction", float, 0.0, 0.5),
    "max_bar_height": ("max_bar_height", float, 1.0, 500.0),
    "min_bar_gap": ("min_bar_gap", float, 0.0, 200.0),
}


def get_series() -> Series:
    """Series from ``SERIES_CSV``, parsed once per process."""
    if config.SERIES_CSV not in _series_cache:
        _series_cache[config.SERIES_CSV] = load_series(config.SERIES_CSV)
    return _series_cache[config.SERIES_CSV]


def _bounded(data: dict, key: str, cast, minimum, maximum, default):
    raw = data.get(key, default)
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number, got {raw!r}")
    if not minimum <= value <= maximum:
        raise ValueError(f"{key} must be between {minimum} and {maximum}")
    return value


def animator_config_from(data: dict | None) -> AnimatorConfig:
    """Build an AnimatorConfig from request JSON over the configured defaults.

    Raises:
        ValueError: On a non-numeric or out-of-range option.
    """
    data = data or {}
    defaults = {
        "tick_ms": config.TICK_MS,
        "top_n": config.TOP_N,
        "jitter_fraction": config.JITTER_FRACTION,
        "max_bar_height": config.MAX_BAR_HEIGHT,
        "min_bar_gap": config.MIN_BAR_GAP,
    }
    options = {
        field: _bounded(data, key, cast, lo, hi, defaults[key])
        for key, (field, cast, lo, hi) in _CONFIG_FIELDS.items()
    }
    limit = data.get("limit_bar_stretch", config.LIMIT_BAR_STRETCH)
    if not isinstance(limit, bool):
        raise ValueError("limit_bar_stretch must be a boolean")
    return AnimatorConfig(limit_bar_stretch=limit, **options)


def plot_choropleth_wrapper():
    """Choropleth of the country table over the configured world geometry."""
    return plot_choropleth(load_regions(config.WORLD_GEOJSON_URL), COUNTRY_CARS)


def plot_brand_shares_wrapper():
    return plot_brand_shares(world_totals())


def plot_final_frame_wrapper(animator_config: AnimatorConfig):
    """Thin wrapper around ``plot_frame`` for the last tick of the race.

    Returns None when the series is empty.
    """
    plans = collect_plans(get_series(), animator_config)
    if not plans:
        return None
    return plot_frame(plans[-1], 1.0, title="Brand output over time")


def create_bar_animation_wrapper(animator_config: AnimatorConfig, interp_steps, dpi):
    """Thin wrapper for ``create_bar_animation`` over the configured series.

    Returns:
        matplotlib.animation.FuncAnimation: The configured animation.
    """
    return create_bar_animation(
        get_series(),
        animator_config,
        interp_steps=interp_steps,
        dpi=dpi,
        title="Brand output over time",
    )
