"""Rate-limiting schedulers for sequential batch processing."""

import asyncio
import time
from collections.abc import Awaitable, Callable

Sleep = Callable[[float], Awaitable[None]]


class FixedDelayScheduler:
    """Sleep a fixed delay every time a country completes.

    Args:
        delay_seconds: Seconds to wait after each country.
        sleep: Awaitable sleep function (injectable for tests).
    """

    def __init__(self, delay_seconds: float = 1.0, *, sleep: Sleep = asyncio.sleep) -> None:
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {delay_seconds}")
        self._delay = delay_seconds
        self._sleep = sleep

    async def wait(self) -> None:
        if self._delay > 0:
            await self._sleep(self._delay)


class TokenBucketScheduler:
    """Token bucket: bursts up to ``capacity`` countries, then ``rate_per_second``.

    Args:
        rate_per_second: Sustained refill rate in tokens per second.
        capacity: Maximum number of banked tokens.
        sleep: Awaitable sleep function (injectable for tests).
        clock: Monotonic clock (injectable for tests).
    """

    def __init__(
        self,
        rate_per_second: float = 1.0,
        capacity: int = 1,
        *,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if rate_per_second <= 0:
            raise ValueError(f"rate_per_second must be > 0, got {rate_per_second}")
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._rate = rate_per_second
        self._capacity = float(capacity)
        self._sleep = sleep
        self._clock = clock
        # The country just finished consumed a token, so start one short
        self._tokens = self._capacity - 1
        self._updated = clock()

    def _refill(self) -> None:
        now = self._clock()
        self._tokens = min(self._capacity, self._tokens + (now - self._updated) * self._rate)
        self._updated = now

    async def wait(self) -> None:
        self._refill()
        if self._tokens < 1:
            await self._sleep((1 - self._tokens) / self._rate)
            self._refill()
        self._tokens = max(0.0, self._tokens - 1)
