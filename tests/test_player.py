from carstats.visuals.anims.player import CONTROLS, RacePlayer


def test_player_buttons_drive_animator(long_series):
    player = RacePlayer(long_series)
    assert set(player.buttons) == {name for name, _, _ in CONTROLS}
    assert player.control("pause") is False

    assert player.control("start")
    assert player.plan is not None and player.plan.tick_index == 0
    assert player.animator.timer_active

    player.animator.tick()
    assert player.plan.tick_index == 1
    player.redraw()
    assert player.timestamp_text.get_text() == "2001"

    assert player.control("pause")
    assert player.control("step_forward")
    assert player.plan.tick_index == 2
    assert player.control("rewind")
    assert player.plan.tick_index == 0

    player.close()
    assert not player.animator.timer_active
