from __future__ import annotations

import math
import time
from collections import defaultdict, deque
from collections.abc import Callable


class RateLimiter:
    """In-memory sliding window rate limiter keyed by ``"<action>:<user id>"``."""

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock
        self._buckets: dict[str, deque[float]] = defaultdict(deque)

    def _now(self) -> float:
        return self._clock() if self._clock is not None else time.monotonic()

    def _prune(self, bucket: deque[float], now: float, window_seconds: float) -> None:
        while bucket and now - bucket[0] > window_seconds:
            bucket.popleft()

    def allow(self, key: str, limit: int, window_seconds: float) -> bool:
        now = self._now()
        bucket = self._buckets[key]
        self._prune(bucket, now, window_seconds)
        if len(bucket) >= limit:
            return False
        bucket.append(now)
        return True

    def retry_after(self, key: str, limit: int, window_seconds: float) -> int:
        """Whole seconds until ``key`` may act again; 0 when it already can."""

        bucket = self._buckets.get(key)
        if not bucket:
            return 0
        now = self._now()
        self._prune(bucket, now, window_seconds)
        if len(bucket) < limit:
            return 0
        return max(1, math.ceil(window_seconds - (now - bucket[0])))

    def reset(self, key: str | None = None) -> None:
        if key is None:
            self._buckets.clear()
        else:
            self._buckets.pop(key, None)


__all__ = ["RateLimiter"]
