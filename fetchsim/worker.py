"""
Consumers of the simulated fetcher, one method per consumption pattern:
- chain: success / failure handlers plus a cleanup hook that always runs
- get_data: await inside try / except
- fetch_all, fetch_first, fetch_settled: concurrent fan-out

Every method reports through the injected logger and returns an Outcome,
so a rejected fetch never escapes as an exception.
"""

import structlog
from typing import Iterable, List

from .combinators import all_of, all_settled, first_of
from .exceptions import FetchFailure
from .fetcher import FetchResult, SimulatedFetcher
from .promise import Failure, Outcome, Success


class FetchWorker:
    """Runs fetches through the different consumption patterns."""

    def __init__(self, fetcher: SimulatedFetcher = None, logger=None):
        self.fetcher = fetcher or SimulatedFetcher()
        self.logger = logger or structlog.get_logger(__name__)

    async def chain(self, identifier: int) -> Outcome:
        """then -> catch -> finally over a single request"""
        return await (
            self.fetcher.request(identifier)
            .then(self._on_data)
            .catch(self._on_failure)
            .finally_(lambda: self.logger.info("callbacks_completed", id=identifier))
        )

    async def get_data(self, identifier: int) -> Outcome:
        """Await the fetch inside a guarded block"""
        try:
            result = await self.fetcher.fetch(identifier)
        except FetchFailure as e:
            return self._on_failure(e)
        return self._on_data(result)

    async def fetch_all(self, identifiers: Iterable[int]) -> Outcome:
        """All requests must succeed; the first rejection fails the whole batch"""
        identifiers = list(identifiers)
        try:
            results = await all_of(self.fetcher.request(i) for i in identifiers)
        except FetchFailure as e:
            self.logger.error("fetch_all_failed",
                              ids=identifiers,
                              failed_id=e.identifier,
                              error=e.message)
            return Failure(e)

        self.logger.info("fetch_all_succeeded",
                         ids=identifiers,
                         results=[r.to_dict() for r in results])
        return Success(results)

    async def fetch_first(self, identifiers: Iterable[int]) -> Outcome:
        """Take whichever request settles first, success or failure"""
        identifiers = list(identifiers)
        outcome = await first_of(self.fetcher.request(i) for i in identifiers).settle()

        if outcome.ok:
            self.logger.info("fetch_first_settled",
                             ids=identifiers,
                             winner=outcome.value.id,
                             result=outcome.value.to_dict())
        elif isinstance(outcome.error, FetchFailure):
            self.logger.info("fetch_first_settled",
                             ids=identifiers,
                             winner=outcome.error.identifier,
                             error=outcome.error.message)
        else:
            raise outcome.error
        return outcome

    async def fetch_settled(self, identifiers: Iterable[int]) -> Outcome:
        """Wait for every request and report each outcome"""
        identifiers = list(identifiers)
        outcomes: List[Outcome] = await all_settled(self.fetcher.request(i) for i in identifiers)

        for identifier, outcome in zip(identifiers, outcomes):
            if not outcome.ok and not isinstance(outcome.error, FetchFailure):
                raise outcome.error
            self.logger.info("fetch_settled",
                             id=identifier,
                             ok=outcome.ok,
                             result=outcome.value.to_dict() if outcome.ok else None,
                             error=None if outcome.ok else outcome.error.message)
        return Success(outcomes)

    def _on_data(self, result: FetchResult) -> Outcome:
        self.logger.info("fetch_succeeded", id=result.id, result=result.to_dict(),
                         fetch_time=result.fetch_time)
        return Success(result)

    def _on_failure(self, error: Exception) -> Outcome:
        if not isinstance(error, FetchFailure):
            raise error
        self.logger.warning("fetch_failed", id=error.identifier, error=error.message)
        return Failure(error)
