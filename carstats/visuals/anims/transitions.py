"""Frame interpolation between two ticks.

``frame_at(plan, progress)`` is a pure function: given a render plan and a
progress value in ``[0, 1]`` it returns the bar geometry, opacity and value
labels for that instant. Everything interpolates linearly.
"""

import math
from dataclasses import dataclass

from carstats.visuals.anims.animator import RenderPlan
from carstats.visuals.anims.layout import Layout
from carstats.visuals.core import constants
from carstats.visuals.core.formatting import format_value


@dataclass(frozen=True)
class BarFrame:
    label: str
    value: float
    text: str
    width: float
    y: float
    height: float
    opacity: float
    rank: int | None
    exiting: bool = False

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "value": self.value,
            "text": self.text,
            "width": self.width,
            "y": self.y,
            "height": self.height,
            "opacity": self.opacity,
            "rank": self.rank,
            "exiting": self.exiting,
        }


@dataclass(frozen=True)
class Frame:
    timestamp: int | float | None
    progress: float
    axis_max: float
    width: float
    layout: Layout
    bars: tuple[BarFrame, ...]

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "progress": self.progress,
            "axis_max": self.axis_max,
            "width": self.width,
            "layout": self.layout.to_dict(),
            "bars": [bar.to_dict() for bar in self.bars],
        }


def interpolate(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def scale(value: float, domain_max: float, width: float) -> float:
    """Map a value onto ``[0, width]`` through the axis domain ``[0, domain_max]``."""
    if domain_max <= 0:
        return 0.0
    return value / domain_max * width


def frame_at(
    plan: RenderPlan, progress: float, width: float = constants.inner_width
) -> Frame:
    """Geometry of every bar ``progress`` of the way through the plan's tick.

    Args:
        plan: The tick's render plan.
        progress: 0 at the tick boundary, 1 when the transition is done.
            Clamped; NaN counts as 0. Non-animated plans (rewind jumps)
            always render at 1.
        width: Pixel width of the value axis.

    Returns:
        Visible bars ordered by rank, followed by exiting bars.
    """
    if math.isnan(progress):
        progress = 0.0
    t = min(max(progress, 0.0), 1.0) if plan.animated else 1.0
    layout, previous_layout = plan.layout, plan.previous_layout
    axis_max = interpolate(plan.previous_axis_domain[1], plan.axis_domain[1], t)
    if not plan.previous_axis_domain[1]:
        axis_max = plan.axis_domain[1]

    bars = []
    for entry in plan.entries:
        if entry.entering:
            start_y, start_opacity = layout.exit_y, 0.0
        else:
            start_y, start_opacity = previous_layout.row_y(entry.previous_rank), 1.0
        value = interpolate(entry.previous_magnitude, entry.magnitude, t)
        bars.append(
            BarFrame(
                label=entry.label,
                value=value,
                text=format_value(value),
                width=scale(value, axis_max, width),
                y=interpolate(start_y, layout.row_y(entry.rank), t),
                height=layout.band_height,
                opacity=interpolate(start_opacity, 1.0, t),
                rank=entry.rank,
            )
        )

    previous_max = plan.previous_axis_domain[1]
    for entry in plan.exiting:
        if t >= 1.0:
            continue
        bars.append(
            BarFrame(
                label=entry.label,
                value=entry.magnitude,
                text=format_value(entry.magnitude),
                width=scale(entry.magnitude, previous_max, width),
                y=interpolate(previous_layout.row_y(entry.rank), layout.exit_y, t),
                height=layout.band_height,
                opacity=interpolate(1.0, 0.0, t),
                rank=None,
                exiting=True,
            )
        )

    return Frame(
        timestamp=plan.timestamp,
        progress=t,
        axis_max=axis_max,
        width=width,
        layout=layout,
        bars=tuple(bars),
    )


def tick_frames(plan: RenderPlan, steps: int, width: float = constants.inner_width) -> list[Frame]:
    """``steps`` evenly spaced frames ending at progress 1 (one for jumps)."""
    if not plan.animated or steps <= 1:
        return [frame_at(plan, 1.0, width)]
    return [frame_at(plan, (i + 1) / steps, width) for i in range(steps)]
