"""Token-bucket rate limiter shared by every request a transport issues."""

from __future__ import annotations

import asyncio
import time


class TokenBucket:
    """Allows ``qps`` requests per second on average and up to ``burst`` at once.

    The bucket starts full.  ``acquire`` waits until a token is available;
    waiters are served in arrival order because the lock is held while
    sleeping.
    """

    def __init__(self, qps: float, burst: int) -> None:
        if qps <= 0:
            raise ValueError("qps must be positive")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self._qps = float(qps)
        self._burst = burst
        self._tokens = float(burst)
        self._updated = time.monotonic()
        self._lock = asyncio.Lock()

    @property
    def qps(self) -> float:
        return self._qps

    @property
    def burst(self) -> int:
        return self._burst

    def _refill(self) -> None:
        now = time.monotonic()
        self._tokens = min(float(self._burst), self._tokens + (now - self._updated) * self._qps)
        self._updated = now

    async def acquire(self) -> None:
        async with self._lock:
            self._refill()
            if self._tokens < 1.0:
                await asyncio.sleep((1.0 - self._tokens) / self._qps)
                self._refill()
            self._tokens -= 1.0
