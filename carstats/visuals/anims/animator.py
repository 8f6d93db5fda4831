"""Ranked-series animator: playback state machine for the bar chart race.

The animator owns one playback session over a fixed series. Every rendered
tick produces an immutable :class:`RenderPlan`; drawing surfaces (matplotlib,
JSON over HTTP) turn a plan plus a progress value into pixels via
:func:`carstats.visuals.anims.transitions.frame_at`.

Control calls made in the wrong state are ignored and return ``False``.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Sequence

from carstats.data.series import Snapshot, is_valid_magnitude
from carstats.visuals.anims.axis import should_update_axis, target_axis_max
from carstats.visuals.anims.layout import Layout, compute_layout
from carstats.visuals.anims.ranking import RankedEntry, rank_entries
from carstats.visuals.anims.state import AnimationState, PlaybackState
from carstats.visuals.anims.timers import Interval, IntervalFactory, ThreadingInterval
from carstats.visuals.core import constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnimatorConfig:
    tick_ms: int = constants.tick_ms
    top_n: int = constants.top_n
    jitter_fraction: float = constants.jitter_fraction
    limit_bar_stretch: bool = constants.limit_bar_stretch
    max_bar_height: float = constants.max_bar_height
    min_bar_gap: float = constants.min_bar_gap
    height: float = constants.inner_height
    axis_headroom: float = constants.axis_headroom
    axis_hysteresis: float = constants.axis_hysteresis


@dataclass(frozen=True)
class ExitingEntry:
    """A bar that left the top-N this tick, with its last visible state."""

    label: str
    magnitude: float
    rank: int

    def to_dict(self) -> dict:
        return {"label": self.label, "magnitude": self.magnitude, "rank": self.rank}


@dataclass(frozen=True)
class RenderPlan:
    """Everything a drawing surface needs for one tick's transition."""

    tick_index: int
    timestamp: int | float | None
    previous_timestamp: int | float | None
    entries: tuple[RankedEntry, ...]
    exiting: tuple[ExitingEntry, ...]
    axis_domain: tuple[float, float]
    previous_axis_domain: tuple[float, float]
    layout: Layout
    previous_layout: Layout
    duration_ms: int
    animated: bool = True
    labels: tuple[str, ...] = field(default=(), repr=False)

    @property
    def axis_changed(self) -> bool:
        return self.axis_domain != self.previous_axis_domain

    def to_dict(self) -> dict:
        return {
            "tick_index": self.tick_index,
            "timestamp": self.timestamp,
            "previous_timestamp": self.previous_timestamp,
            "visible_entries": [entry.to_dict() for entry in self.entries],
            "exiting_entries": [entry.to_dict() for entry in self.exiting],
            "axis_domain": list(self.axis_domain),
            "previous_axis_domain": list(self.previous_axis_domain),
            "axis_changed": self.axis_changed,
            "layout": self.layout.to_dict(),
            "previous_layout": self.previous_layout.to_dict(),
            "duration_ms": self.duration_ms,
            "animated": self.animated,
        }


class RankedSeriesAnimator:
    """Plays a series back as a top-N ranking, one snapshot per tick.

    Args:
        series: Ordered snapshots; fixed for the animator's lifetime.
        config: Tick length, top-N cap, jitter and layout settings.
        interval_factory: Timer backend, see :mod:`carstats.visuals.anims.timers`.
        on_render: Optional listener called with every new plan.
    """

    def __init__(
        self,
        series: Sequence[Snapshot],
        config: AnimatorConfig | None = None,
        interval_factory: IntervalFactory | None = None,
        on_render: Callable[[RenderPlan], None] | None = None,
    ) -> None:
        self.series: tuple[Snapshot, ...] = tuple(series)
        self.config = config or AnimatorConfig()
        self.interval_factory = interval_factory or ThreadingInterval
        self.state = PlaybackState()
        self.memory = AnimationState()
        self.plan: RenderPlan | None = None
        self.labels = tuple(
            dict.fromkeys(label for snap in self.series for label in snap.entries)
        )
        self._listeners: list[Callable[[RenderPlan], None]] = []
        if on_render is not None:
            self._listeners.append(on_render)
        self._timer: Interval | None = None
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def last_index(self) -> int:
        return len(self.series) - 1

    @property
    def timer_active(self) -> bool:
        return self._timer is not None

    def subscribe(self, listener: Callable[[RenderPlan], None]) -> None:
        self._listeners.append(listener)

    # --- per-tick computation ---

    def clamp_index(self, index: int) -> int:
        return min(max(int(index), 0), max(self.last_index, 0))

    def load_tick(self, index: int) -> list[tuple[str, float]]:
        """``(label, magnitude)`` pairs of snapshot ``index`` (clamped).

        Pairs with an empty label or a non-numeric magnitude are skipped.
        """
        if not self.series:
            return []
        snapshot = self.series[self.clamp_index(index)]
        return [
            (label, float(value))
            for label, value in snapshot.entries.items()
            if isinstance(label, str) and label and is_valid_magnitude(value)
        ]

    def rank_entries(self, entries: list[tuple[str, float]]) -> tuple[RankedEntry, ...]:
        return rank_entries(
            entries,
            self.memory.last_rank,
            self.config.top_n,
            self.config.jitter_fraction,
            self.memory.last_magnitudes,
        )

    def compute_axis_domain(self, top_magnitude: float) -> tuple[float, float]:
        """Axis domain for the tick, only moved when the target drifts over 5%."""
        target = target_axis_max(top_magnitude, self.config.axis_headroom)
        if should_update_axis(self.memory.axis_max, target, self.config.axis_hysteresis):
            if target != self.memory.axis_max:
                logger.debug(
                    "animator: axis max %s -> %s", self.memory.axis_max, target
                )
            self.memory.axis_max = target
        return (0.0, self.memory.axis_max)

    def layout(self, visible_count: int) -> Layout:
        return compute_layout(
            visible_count,
            height=self.config.height,
            limit_bar_stretch=self.config.limit_bar_stretch,
            max_bar_height=self.config.max_bar_height,
            min_bar_gap=self.config.min_bar_gap,
        )

    def _render(self, index: int, animated: bool) -> RenderPlan:
        index = self.clamp_index(index)
        self.state.current_tick_index = index
        timestamp = self.series[index].timestamp

        previous_domain = (0.0, self.memory.axis_max)
        previous_entries = self.memory.last_entries
        entries = self.rank_entries(self.load_tick(index))
        top = max((entry.magnitude for entry in entries), default=0.0)
        domain = self.compute_axis_domain(top)
        layout = self.layout(len(entries))
        previous_layout = self.memory.last_layout or layout

        visible = {entry.label for entry in entries}
        exiting = tuple(
            ExitingEntry(entry.label, entry.magnitude, entry.rank)
            for entry in previous_entries
            if entry.label not in visible
        )
        plan = RenderPlan(
            tick_index=index,
            timestamp=timestamp,
            previous_timestamp=self.memory.last_timestamp,
            entries=entries,
            exiting=exiting,
            axis_domain=domain,
            previous_axis_domain=previous_domain,
            layout=layout,
            previous_layout=previous_layout,
            duration_ms=self.config.tick_ms if animated else 0,
            animated=animated,
            labels=self.labels,
        )
        self.memory.remember(entries, timestamp, layout)
        self.plan = plan
        for listener in self._listeners:
            listener(plan)
        return plan

    # --- timer plumbing ---

    def _start_timer(self) -> None:
        self._generation += 1
        generation = self._generation
        self._timer = self.interval_factory(
            lambda: self._on_interval(generation), self.config.tick_ms
        )

    def _stop_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _on_interval(self, generation: int) -> None:
        with self._lock:
            # a callback from a cancelled timer must not touch state
            if generation != self._generation or self._timer is None:
                return
            try:
                self.tick()
            except Exception:
                # a failed tick ends playback
                self._finish()
                raise

    def _finish(self) -> None:
        self._stop_timer()
        self.state.running = False
        self.state.paused = False
        logger.info("animator: playback finished at tick %s", self.state.current_tick_index)

    # --- controls ---

    def tick(self) -> RenderPlan | None:
        """Advance one snapshot. Stops playback once the last one is shown."""
        with self._lock:
            if not self.state.running or self.state.paused:
                return None
            if self.state.current_tick_index >= self.last_index:
                self._finish()
                return None
            plan = self._render(self.state.current_tick_index + 1, animated=True)
            if self.state.current_tick_index >= self.last_index:
                self._finish()
            return plan

    def start(self) -> bool:
        """Reset and play from tick 0; ignored while a timer is active."""
        with self._lock:
            if self._timer is not None:
                return False
            self.state = PlaybackState()
            self.memory.reset()
            self.plan = None
            if not self.series:
                logger.info("animator: empty series, nothing to play")
                return False
            self.state.running = True
            self._render(0, animated=True)
            if self.last_index == 0:
                self._finish()
                return True
            self._start_timer()
            logger.info(
                "animator: started %s ticks every %sms",
                len(self.series),
                self.config.tick_ms,
            )
            return True

    def pause(self) -> bool:
        with self._lock:
            if not self.state.running or self.state.paused or self._timer is None:
                return False
            self._stop_timer()
            self.state.paused = True
            return True

    def resume(self) -> bool:
        with self._lock:
            if not self.state.running or not self.state.paused or self._timer is not None:
                return False
            self.state.paused = False
            self._start_timer()
            return True

    def step_forward(self) -> bool:
        with self._lock:
            if not (self.state.running and self.state.paused):
                return False
            if self.state.current_tick_index >= self.last_index:
                return False
            self._render(self.state.current_tick_index + 1, animated=True)
            return True

    def rewind(self, steps: int = 5) -> bool:
        """Jump back ``steps`` ticks (clamped at 0) without a transition.

        At tick 0 this re-renders tick 0.
        """
        with self._lock:
            if not (self.state.running and self.state.paused):
                return False
            target = max(0, self.state.current_tick_index - max(0, int(steps)))
            self._render(target, animated=False)
            return True

    def step_backward(self) -> bool:
        return self.rewind(1)

    def close(self) -> None:
        """Teardown: cancel any timer so nothing fires against dead surfaces."""
        with self._lock:
            self._stop_timer()
            self.state.running = False
            self.state.paused = False
            self._listeners.clear()

    def available_controls(self) -> dict[str, bool]:
        """Which controls are legal right now, for enabling UI buttons."""
        with self._lock:
            running, paused = self.state.running, self.state.paused
            index = self.state.current_tick_index
            return {
                "start": self._timer is None and bool(self.series),
                "pause": running and not paused and self._timer is not None,
                "resume": running and paused,
                "rewind": running and paused,
                "step_backward": running and paused,
                "step_forward": running and paused and index < self.last_index,
            }

    def status(self) -> dict:
        with self._lock:
            return {
                **self.state.to_dict(),
                "tick_count": len(self.series),
                "timestamp": self.plan.timestamp if self.plan else None,
                "controls": self.available_controls(),
            }
