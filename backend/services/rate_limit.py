"""Fixed-window request limiter, kept in memory per worker.

Each client gets a counter that resets when its window (started by the
client's first request) has elapsed. Expired windows are dropped on the
next ``hit``, so only clients seen within the last window are tracked.
"""

import math
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_in_seconds: int


class FixedWindowRateLimiter:
    def __init__(self, limit: int, window_seconds: float, clock: Callable[[], float] = time.time):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}

    def _drop_expired(self, now: float) -> None:
        expired = [
            client_id
            for client_id, (started, _count) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for client_id in expired:
            del self._windows[client_id]

    def hit(self, client_id: str) -> RateLimitResult:
        """Count one request for ``client_id`` and report whether it is allowed."""
        now = self._clock()
        self._drop_expired(now)
        started, count = self._windows.get(client_id, (now, 0))

        reset_in = max(0, math.ceil(started + self.window_seconds - now))
        if count >= self.limit:
            return RateLimitResult(False, self.limit, 0, reset_in)

        count += 1
        self._windows[client_id] = (started, count)
        return RateLimitResult(True, self.limit, self.limit - count, reset_in)

    def __len__(self) -> int:
        return len(self._windows)
