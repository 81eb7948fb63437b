"""Rate limiting for polite crawling."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class RateLimiter:
    """Bounded fetch slots plus a fixed pause between dequeued items.

    ``slot()`` holds one of ``max_concurrent`` permits for the duration of a
    fetch. ``pause()`` is the politeness delay the crawl loop takes after each
    item, whether or not it was fetched successfully.
    """

    def __init__(self, delay_seconds: float = 0.2, max_concurrent: int = 4):
        self.delay_seconds = delay_seconds
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self.in_flight = 0
        self.peak_in_flight = 0

    async def acquire(self) -> None:
        """Acquire a concurrency slot."""
        await self._semaphore.acquire()
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)

    def release(self) -> None:
        """Release a concurrency slot."""
        self.in_flight -= 1
        self._semaphore.release()

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        await self.acquire()
        try:
            yield
        finally:
            self.release()

    async def pause(self) -> None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
