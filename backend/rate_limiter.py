"""Fixed-window request throttle shared by one provider client."""

import asyncio
import logging
import time
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60.0


class RateLimiter:
    """Allow at most ``requests_per_minute`` calls per 60-second window.

    The window starts when the limiter is created. A caller that arrives after
    the quota is spent sleeps for the rest of the window, then opens a new one.
    State updates run under an ``asyncio.Lock`` so concurrent coroutines sharing
    one limiter are counted one at a time.
    """

    def __init__(
        self,
        requests_per_minute: int,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if requests_per_minute < 1:
            raise ValueError("requests_per_minute must be at least 1")
        self.requests_per_minute = requests_per_minute
        self._clock = clock
        self._sleep = sleep
        self._request_count = 0
        self._window_start = clock()
        self._lock = asyncio.Lock()

    @property
    def request_count(self) -> int:
        return self._request_count

    async def wait_if_needed(self) -> None:
        async with self._lock:
            now = self._clock()
            elapsed = now - self._window_start

            if elapsed >= WINDOW_SECONDS:
                self._request_count = 0
                self._window_start = now
            elif self._request_count >= self.requests_per_minute:
                wait_time = WINDOW_SECONDS - elapsed
                logger.info("Rate limit reached. Waiting %.0fms...", wait_time * 1000)
                await self._sleep(wait_time)
                self._request_count = 0
                self._window_start = self._clock()

            self._request_count += 1
