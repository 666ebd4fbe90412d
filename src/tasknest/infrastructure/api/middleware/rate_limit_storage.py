"""In-memory storage for rate limiting counters.

Token buckets keyed by client and endpoint. The API runs on a single event
loop, so the lock only guards against use from worker threads.
"""

import time
from dataclasses import dataclass
from threading import Lock


@dataclass
class TokenBucket:
    """Token bucket for a specific key."""

    tokens: float
    last_updated: float


class RateLimitStorage:
    """Thread-safe in-memory storage for rate limit counters."""

    def __init__(self, cleanup_interval: int = 3600) -> None:
        self._storage: dict[str, TokenBucket] = {}
        self._lock = Lock()
        self._last_cleanup = time.time()
        self._cleanup_interval = cleanup_interval

    def consume(
        self, key: str, rate_per_minute: float, burst: float = 1.0, now: float | None = None
    ) -> tuple[bool, int, float]:
        """Attempt to consume a token for the given key.

        Args:
            key: The bucket key.
            rate_per_minute: Refill rate.
            burst: Bucket capacity (at least one token).
            now: Current time in seconds; defaults to ``time.time()``.

        Returns:
            A tuple of (is_allowed, remaining_tokens, seconds_until_next_token).
        """
        now = time.time() if now is None else now
        rate_per_second = rate_per_minute / 60.0
        capacity = max(1.0, burst)

        with self._lock:
            if now - self._last_cleanup > self._cleanup_interval:
                self._cleanup_stale(now)

            bucket = self._storage.get(key)
            if bucket is None:
                bucket = TokenBucket(tokens=capacity - 1.0, last_updated=now)
                self._storage[key] = bucket
                return True, int(bucket.tokens), 1.0 / rate_per_second

            elapsed = now - bucket.last_updated
            bucket.tokens = min(capacity, bucket.tokens + elapsed * rate_per_second)
            bucket.last_updated = now

            if bucket.tokens >= 1.0:
                bucket.tokens -= 1.0
                return True, int(bucket.tokens), (capacity - bucket.tokens) / rate_per_second

            return False, 0, (1.0 - bucket.tokens) / rate_per_second

    def reset(self) -> None:
        with self._lock:
            self._storage.clear()

    def _cleanup_stale(self, now: float) -> None:
        """Remove buckets untouched for a full cleanup interval."""
        stale = [k for k, v in self._storage.items() if now - v.last_updated > self._cleanup_interval]
        for k in stale:
            del self._storage[k]
        self._last_cleanup = now
