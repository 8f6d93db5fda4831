import pytest

from carstats.data.series import Snapshot
from carstats.visuals.anims.transitions import frame_at, scale, tick_frames


@pytest.fixture
def swap_plan(make_animator, swap_series, clock):
    animator = make_animator(swap_series, top_n=2)
    animator.start()
    clock.advance()
    return animator.plan


def bars_by_label(frame):
    return {bar.label: bar for bar in frame.bars}


def test_swap_moves_rows_and_values(swap_plan):
    layout = swap_plan.layout
    start = bars_by_label(frame_at(swap_plan, 0.0))
    assert start["B"].y == layout.row_y(1)
    assert start["A"].y == layout.row_y(0)
    assert start["B"].value == 90

    middle = bars_by_label(frame_at(swap_plan, 0.5))
    assert middle["B"].value == pytest.approx(92.5)
    assert middle["B"].text == "93"
    assert middle["A"].y == pytest.approx(layout.step / 2)

    end = frame_at(swap_plan, 1.0)
    assert [bar.label for bar in end.bars] == ["B", "A"]
    assert [bar.y for bar in end.bars] == [0, layout.step]
    assert all(bar.opacity == 1.0 for bar in end.bars)


def test_axis_max_interpolates(swap_plan):
    assert swap_plan.previous_axis_domain == (0.0, 120)
    assert swap_plan.axis_domain == (0.0, 110)
    assert frame_at(swap_plan, 0.5).axis_max == pytest.approx(115)
    end = frame_at(swap_plan, 1.0, width=500)
    assert end.bars[0].width == pytest.approx(95 / 110 * 500)


def test_first_tick_enters_from_below(make_animator, swap_series):
    animator = make_animator(swap_series)
    animator.start()
    plan = animator.plan
    start = frame_at(plan, 0.0)
    # no previous axis: the domain does not grow from zero
    assert start.axis_max == plan.axis_domain[1]
    for bar in start.bars:
        assert bar.y == plan.layout.exit_y
        assert bar.opacity == 0.0
        assert bar.value == 0.0
        assert bar.text == "0"
    end = bars_by_label(frame_at(plan, 1.0))
    assert end["A"].value == 100
    assert end["A"].opacity == 1.0


def test_exiting_bar_slides_out_and_disappears(make_animator):
    series = (
        Snapshot(1, {"A": 100, "B": 90, "C": 10}),
        Snapshot(2, {"A": 100, "B": 50, "C": 95}),
    )
    animator = make_animator(series, top_n=2)
    animator.start()
    animator.tick()
    plan = animator.plan

    middle = frame_at(plan, 0.5)
    exiting = [bar for bar in middle.bars if bar.exiting]
    assert len(exiting) == 1
    b = exiting[0]
    assert b.label == "B"
    assert b.opacity == pytest.approx(0.5)
    assert b.y == pytest.approx((plan.previous_layout.row_y(1) + plan.layout.exit_y) / 2)
    assert b.text == "90"
    assert middle.bars[-1] is b

    end = frame_at(plan, 1.0)
    assert [bar.label for bar in end.bars] == ["A", "C"]


def test_jump_plans_render_final_state(make_animator, long_series, clock):
    animator = make_animator(long_series)
    animator.start()
    clock.advance(4)
    animator.pause()
    animator.rewind(2)
    plan = animator.plan
    assert frame_at(plan, 0.0).progress == 1.0
    assert len(tick_frames(plan, 6)) == 1


def test_tick_frames_are_evenly_spaced(swap_plan):
    frames = tick_frames(swap_plan, 4)
    assert [frame.progress for frame in frames] == [0.25, 0.5, 0.75, 1.0]
    assert frames[-1].timestamp == 2020


def test_progress_is_clamped(swap_plan):
    assert frame_at(swap_plan, -1).progress == 0.0
    assert frame_at(swap_plan, 3).progress == 1.0


def test_scale_with_empty_axis():
    assert scale(10, 0, 500) == 0.0
    assert scale(50, 100, 500) == 250


def test_frame_to_dict(swap_plan):
    body = frame_at(swap_plan, 1.0).to_dict()
    assert body["timestamp"] == 2020
    assert [bar["label"] for bar in body["bars"]] == ["B", "A"]
    assert body["layout"]["band_count"] == 2


def test_nan_progress_is_start_of_tick(swap_plan):
    frame = frame_at(swap_plan, float("nan"))
    assert frame.progress == 0.0
    assert bars_by_label(frame)["B"].text == "90"
