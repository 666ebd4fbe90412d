"""Unit tests for RateLimitStorage token bucket logic."""

from tasknest.infrastructure.api.middleware.rate_limit_storage import RateLimitStorage


def test_consume_initial():
    storage = RateLimitStorage()

    allowed, remaining, _ = storage.consume("key1", rate_per_minute=60, burst=5, now=1000.0)

    assert allowed is True
    assert remaining == 4


def test_consume_exhaust_burst():
    storage = RateLimitStorage()

    results = [storage.consume("key1", rate_per_minute=60, burst=3, now=1000.0) for _ in range(4)]

    assert [r[0] for r in results] == [True, True, True, False]
    assert results[-1][1] == 0
    assert results[-1][2] > 0


def test_refill_over_time():
    storage = RateLimitStorage()
    storage.consume("key1", rate_per_minute=60, burst=1, now=1000.0)

    assert storage.consume("key1", rate_per_minute=60, burst=1, now=1000.5)[0] is False
    assert storage.consume("key1", rate_per_minute=60, burst=1, now=1001.5)[0] is True


def test_keys_are_independent():
    storage = RateLimitStorage()
    storage.consume("a", rate_per_minute=1, burst=1, now=1000.0)

    assert storage.consume("a", rate_per_minute=1, burst=1, now=1000.0)[0] is False
    assert storage.consume("b", rate_per_minute=1, burst=1, now=1000.0)[0] is True


def test_reset_clears_buckets():
    storage = RateLimitStorage()
    storage.consume("a", rate_per_minute=1, burst=1, now=1000.0)

    storage.reset()

    assert storage.consume("a", rate_per_minute=1, burst=1, now=1000.0)[0] is True


def test_stale_buckets_are_cleaned_up():
    storage = RateLimitStorage(cleanup_interval=10)
    storage._last_cleanup = 1000.0
    storage.consume("old", rate_per_minute=60, burst=1, now=1000.0)

    storage.consume("new", rate_per_minute=60, burst=1, now=1020.0)

    assert "old" not in storage._storage
    assert "new" in storage._storage
