import logging
import threading
import time

import pytest

from carstats.data.series import Snapshot
from carstats.visuals.anims.animator import AnimatorConfig, RankedSeriesAnimator
from carstats.visuals.anims.timers import ThreadingInterval


def wait_for(condition, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.005)
    return condition()


@pytest.fixture
def slow_series():
    return tuple(Snapshot(2000 + i, {"A": 100 + i, "B": 50 + 2 * i}) for i in range(200))


def test_interval_fires_until_stopped():
    calls = []
    interval = ThreadingInterval(lambda: calls.append(time.monotonic()), 10)
    try:
        assert wait_for(lambda: len(calls) >= 3)
    finally:
        interval.stop()
    assert interval.stopped
    time.sleep(0.05)
    seen = len(calls)
    time.sleep(0.1)
    assert len(calls) == seen


def test_interval_skips_missed_periods():
    calls = []

    def slow_first():
        calls.append(time.monotonic())
        if len(calls) == 1:
            time.sleep(0.15)

    interval = ThreadingInterval(slow_first, 30)
    try:
        assert wait_for(lambda: len(calls) >= 3)
    finally:
        interval.stop()
    # no burst of catch-up calls after the slow one
    assert calls[2] - calls[1] >= 0.02


def test_interval_stops_on_callback_error(caplog):
    calls = []

    def boom():
        calls.append(1)
        raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR, logger="carstats.visuals.anims.timers"):
        interval = ThreadingInterval(boom, 10)
        assert wait_for(lambda: interval.stopped)
    time.sleep(0.05)
    assert calls == [1]
    assert "callback failed" in caplog.text


def test_thread_timer_pause_resume_close(slow_series):
    animator = RankedSeriesAnimator(slow_series, AnimatorConfig(tick_ms=20))
    try:
        assert animator.start()
        assert wait_for(lambda: animator.state.current_tick_index >= 2)

        assert animator.pause()
        frozen = animator.state.current_tick_index
        time.sleep(0.1)
        assert animator.state.current_tick_index == frozen

        assert animator.resume()
        assert wait_for(lambda: animator.state.current_tick_index > frozen)
    finally:
        animator.close()
    stopped_at = animator.state.current_tick_index
    time.sleep(0.1)
    assert animator.state.current_tick_index == stopped_at
    assert animator.state.running is False


def test_thread_timer_failure_ends_playback(slow_series):
    failed = threading.Event()

    def broken_surface(plan):
        if plan.tick_index == 2:
            failed.set()
            raise RuntimeError("surface gone")

    animator = RankedSeriesAnimator(
        slow_series, AnimatorConfig(tick_ms=20), on_render=broken_surface
    )
    animator.start()
    assert failed.wait(2.0)
    assert wait_for(lambda: not animator.state.running)
    assert animator.state.current_tick_index == 2
    assert animator.timer_active is False
    assert animator.available_controls()["start"]

    animator.close()
