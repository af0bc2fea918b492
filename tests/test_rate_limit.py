"""Unit tests for the fixed-window rate limiter."""

from services.rate_limit import FixedWindowRateLimiter


def test_allows_up_to_limit_then_rejects(clock):
    limiter = FixedWindowRateLimiter(limit=3, window_seconds=900, clock=clock)

    results = [limiter.hit("1.2.3.4") for _ in range(4)]

    assert [r.allowed for r in results] == [True, True, True, False]
    assert [r.remaining for r in results] == [2, 1, 0, 0]
    assert results[-1].reset_in_seconds == 900


def test_window_resets_after_elapsed(clock):
    limiter = FixedWindowRateLimiter(limit=1, window_seconds=900, clock=clock)
    assert limiter.hit("a").allowed
    clock.advance(600)
    rejected = limiter.hit("a")
    assert not rejected.allowed
    assert rejected.reset_in_seconds == 300

    clock.advance(300)
    assert limiter.hit("a").allowed


def test_clients_are_counted_separately(clock):
    limiter = FixedWindowRateLimiter(limit=1, window_seconds=60, clock=clock)
    assert limiter.hit("a").allowed
    assert limiter.hit("b").allowed
    assert not limiter.hit("a").allowed


def test_expired_windows_are_dropped(clock):
    limiter = FixedWindowRateLimiter(limit=5, window_seconds=900, clock=clock)
    for client_id in ("a", "b", "c"):
        limiter.hit(client_id)
    assert len(limiter) == 3

    clock.advance(900)
    limiter.hit("d")

    assert len(limiter) == 1
