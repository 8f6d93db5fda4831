"""Numeric axis helpers: "nice" domain rounding, tick values, hysteresis."""

import math

from carstats.visuals.core import constants

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_increment(start: float, stop: float, count: int) -> float:
    """Step between round ticks, d3 style.

    Positive values are the step itself; negative values ``-k`` stand for a
    step of ``1 / k`` (keeps small steps exact).
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power >= 0:
        return factor * 10**power
    return -(10**-power) / factor


def nice_max(value: float, count: int = constants.axis_ticks) -> float:
    """Extend ``[0, value]`` so its upper bound lands on a round tick."""
    if not value or value <= 0 or not math.isfinite(value):
        return 0.0
    start, stop = 0.0, float(value)
    prestep = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == prestep:
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        else:
            break
        prestep = step
    return stop


def axis_ticks(domain_max: float, count: int = constants.axis_ticks) -> list[float]:
    """Round tick values within ``[0, domain_max]``."""
    if domain_max <= 0:
        return [0.0]
    step = tick_increment(0.0, domain_max, count)
    if step > 0:
        n = math.floor(domain_max / step + 1e-9)
        return [i * step for i in range(n + 1)]
    n = math.floor(domain_max * -step + 1e-9)
    return [i / -step for i in range(n + 1)]


def target_axis_max(top_magnitude: float, headroom: float = constants.axis_headroom) -> float:
    """Ideal axis max for the tick's largest visible value."""
    return nice_max(top_magnitude * headroom)


def should_update_axis(
    current_max: float, target_max: float, hysteresis: float = constants.axis_hysteresis
) -> bool:
    """True when there is no axis yet or the target moved more than ``hysteresis``."""
    if not current_max:
        return True
    return abs(target_max - current_max) / current_max > hysteresis
