"""
Fixed-window rate limiting keyed by client address.
"""

import math
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable


@dataclass
class _Window:
    started_at: float
    count: int = 0


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after_seconds: int


class FixedWindowRateLimiter:
    """Counts hits per key inside windows of ``window_seconds``.

    The first hit for a key opens its window; once ``max_requests`` hits are
    recorded, further hits are refused until the window expires.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be greater than zero")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be greater than zero")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = Lock()
        self._windows: dict[str, _Window] = {}
        self._next_sweep = clock() + window_seconds

    def _sweep_expired(self, now: float) -> None:
        if now < self._next_sweep:
            return
        expired_keys = [
            key
            for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired_keys:
            del self._windows[key]
        self._next_sweep = now + self.window_seconds

    def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            self._sweep_expired(now)

            window = self._windows.get(key)
            if window is None or now - window.started_at >= self.window_seconds:
                window = _Window(started_at=now)
                self._windows[key] = window

            reset_at = window.started_at + self.window_seconds
            allowed = window.count < self.max_requests
            if allowed:
                window.count += 1

            return RateLimitDecision(
                allowed=allowed,
                limit=self.max_requests,
                remaining=max(0, self.max_requests - window.count),
                reset_at=reset_at,
                retry_after_seconds=max(0, math.ceil(reset_at - now)),
            )

    def reset(self, key: str) -> None:
        with self._lock:
            self._windows.pop(key, None)
