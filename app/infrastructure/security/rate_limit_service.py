"""
In-process fixed-window rate limiter.

Each key owns a bucket ``(count, window_start)``. A call first resets the
bucket when more than one window length has elapsed since ``window_start``,
then increments the count; the call is allowed while the count stays within
``max_calls``. Denied calls still count.

Windows are fixed, not sliding: a client can spend a full budget at the end
of one window and another at the start of the next. Buckets live for the
process lifetime and stale keys are never evicted. Updates are plain
read-modify-write with no await in between, which is atomic on one event
loop but not across worker processes; deployments running several workers
need a shared-store implementation of ``IRateLimiter``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import structlog

from app.domain.interfaces import IRateLimiter

logger = structlog.get_logger(__name__)


@dataclass
class RateBucket:
    """Mutable counter for a single key."""

    count: int
    window_start: float


class FixedWindowRateLimiter(IRateLimiter):
    """Per-key fixed-window counter with an injectable clock."""

    def __init__(
        self,
        max_calls: int = 20,
        window_seconds: float = 60.0,
        *,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_calls <= 0:
            raise ValueError("max_calls must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_calls = max_calls
        self.window_seconds = window_seconds
        self.name = name
        self._clock = clock
        self._buckets: Dict[str, RateBucket] = {}

    async def allow(self, key: str) -> bool:
        now = self._clock()
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = RateBucket(count=0, window_start=now)
            self._buckets[key] = bucket
        if now - bucket.window_start > self.window_seconds:
            bucket.count = 0
            bucket.window_start = now
        bucket.count += 1

        allowed = bucket.count <= self.max_calls
        if not allowed:
            logger.warning(
                "Rate limit exceeded",
                limiter=self.name,
                key=key,
                count=bucket.count,
                max_calls=self.max_calls,
            )
        return allowed

    async def reset(self, key: Optional[str] = None) -> None:
        if key is None:
            self._buckets.clear()
        else:
            self._buckets.pop(key, None)

    def usage(self, key: str) -> int:
        """Calls recorded for ``key`` in its current window (0 when unknown)."""
        bucket = self._buckets.get(key)
        return bucket.count if bucket else 0

    async def check_health(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "backend": "memory",
            "limiter": self.name,
            "max_calls": self.max_calls,
            "window_seconds": self.window_seconds,
            "tracked_keys": len(self._buckets),
        }


__all__ = ["FixedWindowRateLimiter", "RateBucket"]
