from __future__ import annotations

from taskboard.ratelimit import SlidingWindowLimiter


class Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_allows_up_to_limit_then_reports_wait() -> None:
    clock = Clock()
    limiter = SlidingWindowLimiter(limit=2, window=60, clock=clock)

    assert limiter.hit("u1") == 0.0
    clock.now += 10
    assert limiter.hit("u1") == 0.0
    clock.now += 5
    assert limiter.hit("u1") == 45.0


def test_window_slides_and_rejections_do_not_count() -> None:
    clock = Clock()
    limiter = SlidingWindowLimiter(limit=1, window=30, clock=clock)

    assert limiter.hit("u1") == 0.0
    for _ in range(5):
        assert limiter.hit("u1") > 0
    clock.now += 30
    assert limiter.hit("u1") == 0.0


def test_keys_are_independent() -> None:
    limiter = SlidingWindowLimiter(limit=1, window=60, clock=Clock())

    assert limiter.hit("u1") == 0.0
    assert limiter.hit("u2") == 0.0
    assert limiter.hit("u1") > 0


def test_idle_keys_are_forgotten() -> None:
    clock = Clock()
    limiter = SlidingWindowLimiter(limit=1, window=60, clock=clock)

    limiter.hit("u1")
    limiter.hit("u2")
    assert len(limiter) == 2

    clock.now += 61
    assert limiter.hit("u3") == 0.0
    assert len(limiter) == 1
