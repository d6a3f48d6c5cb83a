"""Unit tests for the fixed-window rate limit counter."""

from app.presentation.middleware.rate_limit import FixedWindowCounter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_requests_over_the_limit_get_retry_after():
    clock = FakeClock()
    counter = FixedWindowCounter(limit=2, window_seconds=60, clock=clock)

    assert counter.hit("1.2.3.4") is None
    assert counter.hit("1.2.3.4") is None
    clock.now += 15
    assert counter.hit("1.2.3.4") == 45


def test_clients_are_counted_separately():
    counter = FixedWindowCounter(limit=1, window_seconds=60, clock=FakeClock())

    assert counter.hit("a") is None
    assert counter.hit("b") is None
    assert counter.hit("a") is not None


def test_window_resets():
    clock = FakeClock()
    counter = FixedWindowCounter(limit=1, window_seconds=60, clock=clock)

    counter.hit("a")
    assert counter.hit("a") is not None
    clock.now += 60
    assert counter.hit("a") is None
