import pytest

from evosim.clock import TimeController


@pytest.fixture
def events():
    return []


@pytest.fixture
def controller(events):
    # 0.25 s ticks keep the float arithmetic exact
    tc = TimeController(tick_rate=4, clock=lambda: 0.0)
    tc.on_tick(lambda: events.append("tick"))
    tc.on_render(lambda: events.append("render"))
    return tc


def test_ticks_follow_elapsed_time(controller, events):
    controller.start(now=0.0)
    assert controller.frame(now=1.0) == 4
    assert events == ["tick"] * 4 + ["render"]


def test_remainder_carries_to_next_frame(controller):
    controller.start(now=0.0)
    assert controller.frame(now=0.375) == 1
    assert controller.frame(now=0.5) == 1


def test_paused_controller_renders_without_ticking(controller, events):
    assert controller.frame(now=5.0) == 0
    assert events == ["render"]
    controller.start(now=5.0)
    controller.pause()
    assert controller.frame(now=9.0) == 0
    assert events == ["render", "render"]


def test_start_while_running_keeps_reference_time(controller):
    controller.start(now=0.0)
    controller.start(now=0.75)
    assert controller.frame(now=1.0) == 4


def test_restart_after_pause_resamples_time(controller):
    controller.start(now=0.0)
    controller.pause()
    controller.start(now=10.0)
    assert controller.frame(now=10.5) == 2


def test_speed_scales_elapsed_time(controller):
    controller.speed = 2.0
    controller.start(now=0.0)
    assert controller.frame(now=0.5) == 4


def test_tick_cap_drops_backlog(events):
    tc = TimeController(tick_rate=4, max_ticks_per_frame=3, clock=lambda: 0.0)
    tc.on_tick(lambda: events.append("tick"))
    tc.start(now=0.0)
    assert tc.frame(now=10.0) == 3
    assert tc.accumulator == 0.0
    assert tc.frame(now=10.25) == 1


def test_uses_injected_clock():
    now = [0.0]
    tc = TimeController(tick_rate=4, clock=lambda: now[0])
    tc.start()
    now[0] = 0.5
    assert tc.frame() == 2
