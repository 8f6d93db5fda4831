"""Common visualization constants used across modules."""

# Animation/layout defaults
tick_ms: int = 500
top_n: int = 25
jitter_fraction: float = 0.002
axis_headroom: float = 1.1
axis_hysteresis: float = 0.05
axis_ticks: int = 10
band_padding: float = 0.1

# Stretch limit for series with few visible bars
limit_bar_stretch: bool = True
max_bar_height: float = 28
min_bar_gap: float = 8

# Drawing surface (pixels), margins mirror the web layout
svg_width: int = 800
svg_height: int = 500
margin: dict[str, int] = {"top": 70, "right": 120, "bottom": 30, "left": 140}
inner_width: int = svg_width - margin["left"] - margin["right"]
inner_height: int = svg_height - margin["top"] - margin["bottom"]

# Exported animations
dpi: int = 80
figsize: tuple[float, float] = (svg_width / dpi, svg_height / dpi)
interp_steps: int = 12
facecolor: str = "#F0F0F0"
