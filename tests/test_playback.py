"""Tests for playback time mapping."""

import pytest

from stickforge.models.enums import PlaybackMode
from stickforge.pipeline.playback import MIN_TOTAL_DURATION, PlaybackClock, map_time


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [(0, 0), (10, 10), (15, 5), (20, 0), (25, 5), (3, 3)],
)
def test_pingpong(elapsed: float, expected: float):
    position = map_time(elapsed, 10, "pingpong")
    assert position.time == pytest.approx(expected)
    assert position.finished is False


def test_loop_wraps():
    assert map_time(12, 10, PlaybackMode.LOOP).time == pytest.approx(2)
    assert map_time(4, 10).time == pytest.approx(4)


def test_reverse_runs_backwards():
    assert map_time(3, 10, PlaybackMode.REVERSE).time == pytest.approx(7)
    assert map_time(0, 10, PlaybackMode.REVERSE).time == pytest.approx(10)


def test_once_clamps_and_finishes():
    assert map_time(5, 10, PlaybackMode.ONCE) == (5, False)
    assert map_time(12, 10, PlaybackMode.ONCE) == (10, True)
    assert map_time(10, 10, PlaybackMode.ONCE).finished is True


def test_zero_duration_is_safe():
    for mode in PlaybackMode:
        position = map_time(3.7, 0, mode)
        assert 0 <= position.time <= MIN_TOTAL_DURATION


def test_negative_elapsed_treated_as_zero():
    assert map_time(-4, 10).time == 0


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        map_time(1, 10, "sideways")


def test_clock_ticks_from_anchor():
    clock = PlaybackClock(PlaybackMode.LOOP)
    assert clock.tick(1.0, now=5.0) is None

    clock.start(now=100.0)
    assert clock.running
    assert clock.elapsed(now=101.25) == pytest.approx(1.25)
    assert clock.tick(1.0, now=101.25).time == pytest.approx(0.25)

    clock.start(now=200.0)
    assert clock.tick(1.0, now=200.5).time == pytest.approx(0.5)

    clock.stop()
    assert not clock.running
    assert clock.tick(1.0, now=300.0) is None


def test_clock_uses_injected_time_source():
    now = [10.0]
    clock = PlaybackClock("pingpong", clock=lambda: now[0])
    clock.start()
    now[0] = 11.5
    assert clock.tick(1.0).time == pytest.approx(0.5)
