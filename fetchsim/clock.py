"""
Clocks used by the fetcher to wait out its simulated latency.

AsyncioClock waits on the running event loop. ManualClock keeps virtual time
that only moves when advance() is awaited, so tests settle fetches instantly.
"""

import asyncio
import heapq
import itertools
import structlog
from typing import List, Tuple

logger = structlog.get_logger(__name__)


class AsyncioClock:
    """Real clock backed by the running event loop."""

    def now(self) -> float:
        return asyncio.get_running_loop().time()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class ManualClock:
    def __init__(self, start: float = 0.0):
        """Initialize a virtual clock at `start` seconds with no sleepers."""
        self._now = start
        self._sleepers: List[Tuple[float, int, asyncio.Future]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of sleepers that have not been woken yet."""
        return len(self._sleepers)

    async def sleep(self, seconds: float) -> None:
        """Park the caller until the clock is advanced past now + seconds."""
        if seconds <= 0:
            await asyncio.sleep(0)
            return

        waiter = asyncio.get_running_loop().create_future()
        heapq.heappush(self._sleepers, (self._now + seconds, next(self._counter), waiter))
        await waiter

    async def advance(self, seconds: float) -> None:
        """Move virtual time forward, waking sleepers in deadline order.

        Sleepers sharing a deadline wake in the order they went to sleep.
        Each woken task gets a loop turn before the next one is released.
        """
        if seconds < 0:
            raise ValueError(f"Cannot move clock backwards by {seconds}s")

        # Let freshly scheduled tasks reach their sleep() first
        await self._yield()

        target = self._now + seconds
        while self._sleepers and self._sleepers[0][0] <= target:
            deadline, _, waiter = heapq.heappop(self._sleepers)
            self._now = deadline
            if not waiter.done():
                waiter.set_result(None)
            await self._yield()

        self._now = target
        logger.debug("manual_clock_advanced", now=self._now, pending=len(self._sleepers))

    async def _yield(self, turns: int = 5) -> None:
        for _ in range(turns):
            await asyncio.sleep(0)
