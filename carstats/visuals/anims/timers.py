"""Periodic timers that drive playback.

An interval factory is any callable ``factory(callback, interval_ms)`` that
starts calling ``callback`` every ``interval_ms`` and returns an object with a
``stop()`` method. The animator never cares which backend it gets.
"""

import logging
import threading
import time
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class Interval(Protocol):
    def stop(self) -> None: ...


IntervalFactory = Callable[[Callable[[], None], float], Interval]


class ThreadingInterval:
    """Fixed-period timer on a daemon thread, used by server-side sessions.

    Missed periods are skipped rather than replayed.
    """

    def __init__(self, callback: Callable[[], None], interval_ms: float) -> None:
        self.callback = callback
        self.period = interval_ms / 1000
        self._stopped = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="playback-interval", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        next_at = time.monotonic() + self.period
        while not self._stopped.wait(max(0.0, next_at - time.monotonic())):
            try:
                self.callback()
            except Exception:
                logger.exception("interval: callback failed, stopping timer")
                self._stopped.set()
                break
            next_at += self.period
            now = time.monotonic()
            if next_at < now:
                next_at = now + self.period

    def stop(self) -> None:
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()


class ManualInterval:
    """Interval that only fires when told to."""

    def __init__(self, callback: Callable[[], None], interval_ms: float) -> None:
        self.callback = callback
        self.interval_ms = interval_ms
        self.stopped = False

    def fire(self) -> None:
        if not self.stopped:
            self.callback()

    def stop(self) -> None:
        self.stopped = True


class ManualClock:
    """Interval factory for offline rendering and tests.

    Keeps every interval it created; :meth:`advance` fires the active ones.
    """

    def __init__(self) -> None:
        self.intervals: list[ManualInterval] = []

    def __call__(self, callback: Callable[[], None], interval_ms: float) -> ManualInterval:
        interval = ManualInterval(callback, interval_ms)
        self.intervals.append(interval)
        return interval

    @property
    def active(self) -> list[ManualInterval]:
        return [interval for interval in self.intervals if not interval.stopped]

    def advance(self, periods: int = 1) -> None:
        for _ in range(periods):
            for interval in self.active:
                interval.fire()
