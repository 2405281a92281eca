from __future__ import annotations

import math
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Tuple

from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from p4bridge.shared.gate import GateLogger

_log = GateLogger.get("RateLimit")

REJECTION_MESSAGE = "Too many requests from this IP, please try again later."


class SlidingWindowRateLimiter:
    """
    Per-key sliding window request counter.

    A key may make ``max_requests`` requests in any ``window_seconds`` span.
    Keys whose hits have all left the window are dropped every
    ``sweep_interval`` calls. Safe to share between threads.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 900,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: int = 1000,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._calls = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        """Number of keys currently tracked."""
        with self._lock:
            return len(self._hits)

    def hit(self, key: str) -> Tuple[bool, float]:
        """
        Record a request for key.

        Returns:
            (allowed, retry_after_seconds). Rejected requests are not recorded.
        """
        now = self._clock()
        cutoff = now - self.window_seconds

        with self._lock:
            self._calls += 1
            if self._calls % self.sweep_interval == 0:
                self._sweep(cutoff)

            hits = self._hits.get(key)
            if hits is not None:
                while hits and hits[0] <= cutoff:
                    hits.popleft()
                if not hits:
                    del self._hits[key]
                    hits = None

            if hits is not None and len(hits) >= self.max_requests:
                return False, max(hits[0] + self.window_seconds - now, 0.0)

            if hits is None:
                hits = self._hits[key] = deque()
            hits.append(now)
            return True, 0.0

    def _sweep(self, cutoff: float) -> None:
        # Caller holds the lock. The newest hit is last in each deque.
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._hits[key]
        if stale:
            _log.debug(f"Dropped {len(stale)} idle rate limit keys")

    def remaining(self, key: str) -> int:
        cutoff = self._clock() - self.window_seconds
        with self._lock:
            hits = self._hits.get(key, ())
            used = sum(1 for t in hits if t > cutoff)
        return max(self.max_requests - used, 0)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply a SlidingWindowRateLimiter to paths under a prefix, keyed by client address."""

    def __init__(self, app, limiter: SlidingWindowRateLimiter, prefix: str = "/api/"):
        super().__init__(app)
        self._limiter = limiter
        self._prefix = prefix

    async def dispatch(self, request, call_next):
        if not request.url.path.startswith(self._prefix):
            return await call_next(request)

        key = request.client.host if request.client else "unknown"
        allowed, retry_after = self._limiter.hit(key)
        if not allowed:
            _log.warning(f"Rate limit exceeded for {key} on {request.url.path}")
            return PlainTextResponse(
                REJECTION_MESSAGE,
                status_code=429,
                headers={"Retry-After": str(math.ceil(retry_after))},
            )

        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(self._limiter.max_requests)
        response.headers["RateLimit-Remaining"] = str(self._limiter.remaining(key))
        return response


__all__ = ["REJECTION_MESSAGE", "RateLimitMiddleware", "SlidingWindowRateLimiter"]
