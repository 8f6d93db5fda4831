import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from carstats.data.series import Snapshot  # noqa: E402
from carstats.visuals.anims.animator import AnimatorConfig, RankedSeriesAnimator  # noqa: E402
from carstats.visuals.anims.timers import ManualClock  # noqa: E402


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def swap_series():
    return (
        Snapshot(2019, {"A": 100, "B": 90}),
        Snapshot(2020, {"A": 80, "B": 95}),
    )


@pytest.fixture
def long_series():
    return tuple(
        Snapshot(2000 + i, {"A": 100 + 10 * i, "B": 200 - 5 * i, "C": 50 + 20 * i})
        for i in range(12)
    )


@pytest.fixture
def make_animator(clock):
    """Animator factory on the manual clock, recording every plan."""

    def factory(series, **config):
        plans = []
        animator = RankedSeriesAnimator(
            series,
            AnimatorConfig(**config),
            interval_factory=clock,
            on_render=plans.append,
        )
        animator.plans = plans
        return animator

    return factory
