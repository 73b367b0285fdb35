"""
Fan-out over several awaitables at once.

- all_of: every operation must succeed, first failure rejects the aggregate
- first_of: whichever operation settles first wins, success or failure
- all_settled: wait for everything, report each outcome

Nothing is cancelled: operations that lose a race or outlive a rejection keep
running to settlement, and their failures are marked as observed.
"""

import asyncio
from typing import Any, Awaitable, Iterable, List

from .promise import Failure, Outcome, Promise, Success, mark_observed


def _start(items: Iterable[Awaitable[Any]]) -> List[asyncio.Future]:
    futures = []
    for item in items:
        if isinstance(item, Promise):
            futures.append(item.future)
        else:
            futures.append(asyncio.ensure_future(item))
    return futures


def all_of(items: Iterable[Awaitable[Any]]) -> Promise[List[Any]]:
    """Resolve with all values in input order, or reject with the first failure to settle."""
    futures = _start(items)

    async def aggregate():
        if not futures:
            return []
        return await asyncio.gather(*futures)

    return Promise(aggregate())


def first_of(items: Iterable[Awaitable[Any]]) -> Promise[Any]:
    """Settle with the outcome of the earliest operation to settle.

    Operations completing within the same loop turn are ordered by their
    position in `items`.
    """
    futures = _start(items)
    if not futures:
        raise ValueError("first_of() needs at least one awaitable")

    async def race():
        done, pending = await asyncio.wait(futures, return_when=asyncio.FIRST_COMPLETED)
        for future in pending:
            future.add_done_callback(mark_observed)

        winner = next(future for future in futures if future in done)
        for future in done:
            if future is not winner:
                mark_observed(future)
        return winner.result()

    return Promise(race())


def all_settled(items: Iterable[Awaitable[Any]]) -> Promise[List[Outcome]]:
    """Resolve with one Outcome per operation, in input order, once all have settled."""
    futures = _start(items)

    async def aggregate():
        if futures:
            await asyncio.wait(futures)

        outcomes = []
        for future in futures:
            error = future.exception()
            outcomes.append(Failure(error) if error is not None else Success(future.result()))
        return outcomes

    return Promise(aggregate())
