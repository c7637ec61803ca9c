import io

import pytest

from cubcaster.timer import FrameTimer


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start
        self.slept = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.slept.append(seconds)
        self.now += seconds


def make_timer():
    clock = FakeClock()
    out = io.StringIO()
    return FrameTimer(clock=clock, sleeper=clock.sleep, out=out), clock, out


def test_first_delta_is_zero():
    timer, _, _ = make_timer()
    assert timer.delta() == 0.0


def test_delta_measures_elapsed_time():
    timer, clock, _ = make_timer()
    timer.delta()
    clock.now += 0.25
    assert timer.delta() == pytest.approx(0.25)
    clock.now += 0.5
    assert timer.delta() == pytest.approx(0.5)


def test_delta_never_negative():
    timer, clock, _ = make_timer()
    timer.delta()
    clock.now -= 3.0
    assert timer.delta() == 0.0


def test_sleep_first_call_does_not_sleep():
    timer, clock, _ = make_timer()
    assert timer.sleep(100.0) == 0.0
    assert clock.slept == []


def test_sleep_fills_rest_of_frame():
    timer, clock, _ = make_timer()
    timer.sleep(100.0)
    clock.now += 0.004
    slept = timer.sleep(100.0)
    assert slept == pytest.approx(0.01 - 0.004, abs=1e-5)
    assert clock.slept == [slept]


def test_sleep_skipped_when_frame_overran():
    timer, clock, _ = make_timer()
    timer.sleep(100.0)
    clock.now += 0.05
    assert timer.sleep(100.0) == 0.0
    assert clock.slept == []


def test_sleep_ignores_non_positive_rate():
    timer, clock, _ = make_timer()
    timer.sleep(0.0)
    clock.now += 0.001
    assert timer.sleep(-5.0) == 0.0
    assert clock.slept == []


def test_log_fps_silent_within_first_second():
    timer, clock, out = make_timer()
    assert timer.log_fps() is None
    clock.now += 0.5
    assert timer.log_fps() is None
    assert out.getvalue() == ""


def test_log_fps_reports_after_a_second_and_resets():
    timer, clock, out = make_timer()
    timer.log_fps()
    for _ in range(2):
        clock.now += 0.5
        timer.log_fps()
    clock.now += 1.0
    message = timer.log_fps()
    assert message == "[timer] 2.00 FPS (avg 500.00 ms)"
    assert out.getvalue() == message + "\n"
    clock.now += 0.1
    assert timer.log_fps() is None