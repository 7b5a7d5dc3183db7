"""In-memory storage for rate limiting counters.

Counts requests per key in fixed windows: each key may make at most
max_requests requests per window, and the count resets once the window that
started with the key's first request has elapsed.
"""

import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable


@dataclass
class RequestWindow:
    """Request counter for one key (client address)."""

    started_at: float
    count: int


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request."""

    allowed: bool
    limit: int
    remaining: int
    reset_seconds: float


class RateLimitStorage:
    """Thread-safe in-memory storage for rate limit counters."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize storage.

        Args:
            max_requests: Requests allowed per key per window.
            window_seconds: Window length in seconds.
            clock: Time source, monotonic seconds.
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, RequestWindow] = {}
        self._lock = Lock()
        self._last_cleanup = clock()

    def hit(self, key: str) -> RateLimitDecision:
        """Count one request for the given key.

        Args:
            key: The unique key (client address).

        Returns:
            Whether the request is allowed, with the remaining quota and the
            seconds until the window resets.
        """
        now = self._clock()

        with self._lock:
            if now - self._last_cleanup > self.window_seconds:
                self._cleanup_expired(now)

            window = self._windows.get(key)
            if window is None or now - window.started_at >= self.window_seconds:
                window = RequestWindow(started_at=now, count=0)
                self._windows[key] = window

            reset_seconds = max(0.0, window.started_at + self.window_seconds - now)
            if window.count >= self.max_requests:
                return RateLimitDecision(False, self.max_requests, 0, reset_seconds)

            window.count += 1
            return RateLimitDecision(
                True, self.max_requests, self.max_requests - window.count, reset_seconds
            )

    def reset(self) -> None:
        """Forget all counters."""
        with self._lock:
            self._windows.clear()

    def _cleanup_expired(self, now: float) -> None:
        expired = [
            key
            for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
        self._last_cleanup = now
