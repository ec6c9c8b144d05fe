"""In-memory sliding-window rate limiting.

The limiter is the one piece of state shared between requests. A single
lock covers prune, check, and append, so concurrent requests for the same
key cannot both squeeze into the last slot. Keys that go quiet for a full
window are dropped, at most one sweep per window.
"""

import threading
import time
from collections.abc import Callable

from wren.context import Context
from wren.errors import RateLimitError
from wren.middleware.protocol import Handler, Middleware


class RateLimiter:
    """Allow at most *max_requests* per *window* seconds for each key.

    Usage::

        limiter = RateLimiter(max_requests=100, window=60.0)
        app.use(rate_limit(limiter))
    """

    __slots__ = ("_clock", "_last_sweep", "_lock", "_requests", "max_requests", "window")

    def __init__(
        self,
        max_requests: int,
        window: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self._lock = threading.Lock()
        self._requests: dict[str, list[float]] = {}
        self._last_sweep = clock()

    def allow(self, key: str) -> bool:
        """Record a request for *key* and report whether it fits the budget."""
        with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self.window:
                self._sweep(now)

            recent = [t for t in self._requests.get(key, ()) if now - t < self.window]
            if len(recent) >= self.max_requests:
                if recent:
                    self._requests[key] = recent
                else:
                    self._requests.pop(key, None)
                return False
            recent.append(now)
            self._requests[key] = recent
            return True

    def _sweep(self, now: float) -> None:
        """Forget keys whose newest request has left the window. Caller holds the lock."""
        self._last_sweep = now
        stale = [key for key, times in self._requests.items() if now - times[-1] >= self.window]
        for key in stale:
            del self._requests[key]

    def __len__(self) -> int:
        """Number of keys currently tracked."""
        with self._lock:
            return len(self._requests)

    def retry_after(self, key: str) -> int:
        """Whole seconds until the oldest request for *key* leaves the window."""
        with self._lock:
            times = self._requests.get(key)
            if not times:
                return 0
            remaining = self.window - (self._clock() - times[0])
            return max(1, int(remaining + 0.999))


def client_key(ctx: Context) -> str:
    """Identify the client: first ``X-Forwarded-For`` hop, ``X-Real-IP``, or ``"unknown"``."""
    forwarded = ctx.header("X-Forwarded-For").split(",")[0].strip()
    if forwarded:
        return forwarded
    return ctx.header("X-Real-IP") or "unknown"


def rate_limit(
    limiter: RateLimiter,
    *,
    key: Callable[[Context], str] = client_key,
) -> Middleware:
    """Reject with 429 once the client's budget is spent."""

    def middleware(next: Handler) -> Handler:
        async def handler(ctx: Context) -> None:
            client = key(ctx)
            if not limiter.allow(client):
                raise RateLimitError("Too many requests", retry_after=limiter.retry_after(client))
            await next(ctx)

        return handler

    return middleware
