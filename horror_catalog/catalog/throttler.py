"""Sliding-window request throttler.

Keeps outbound calls under TMDB's limit (40 requests per 10 seconds)
by delaying admission, never by failing.
"""

import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable
from typing import TypeVar

from horror_catalog.settings import TMDBSettings, settings
from horror_catalog.utils.logger import setup_logger

logger = setup_logger("catalog.throttler")

T = TypeVar("T")

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]


class RequestThrottler:
    """Admit requests in FIFO order under a rolling-window limit.

    A single lock serializes admission: asyncio wakes lock waiters in
    arrival order, so the first caller to queue is the first admitted.

    Attributes:
        max_requests: Admissions allowed per window.
        window_seconds: Rolling window length.
    """

    def __init__(
        self,
        max_requests: int = 40,
        window_seconds: float = 10.0,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """Initialize throttler.

        Args:
            max_requests: Admissions allowed per window.
            window_seconds: Rolling window length in seconds.
            clock: Monotonic time source.
            sleep: Coroutine used to wait for the window to move.
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._sleep = sleep
        self._timestamps: deque[float] = deque()
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, tmdb: TMDBSettings | None = None) -> "RequestThrottler":
        """Build a throttler from TMDB rate limit settings."""
        tmdb = tmdb or settings.tmdb
        return cls(
            max_requests=tmdb.requests_per_period,
            window_seconds=tmdb.period_seconds,
        )

    @property
    def in_window(self) -> int:
        """Number of admissions inside the current window."""
        self._prune(self._clock())
        return len(self._timestamps)

    async def admit(self, request: T) -> T:
        """Wait until the request may be sent, then record its admission.

        Args:
            request: Opaque request object, returned unchanged.

        Returns:
            The admitted request.
        """
        async with self._lock:
            while True:
                now = self._clock()
                self._prune(now)

                if len(self._timestamps) < self.max_requests:
                    self._timestamps.append(now)
                    return request

                wait_time = self._timestamps[0] + self.window_seconds - now
                logger.debug(f"Rate limit: waiting {wait_time:.2f}s")
                await self._sleep(max(wait_time, 0.0))

    def _prune(self, now: float) -> None:
        """Drop admission timestamps that left the window."""
        cutoff = now - self.window_seconds
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()
