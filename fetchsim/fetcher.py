
import structlog
from datetime import datetime, timezone
from typing import Dict, Optional, Union

from .clock import AsyncioClock, ManualClock
from .config import Config
from .exceptions import FetchFailure, InvalidIdentifierParity, InvalidIdentifierRange
from .promise import Promise

logger = structlog.get_logger(__name__)

Clock = Union[AsyncioClock, ManualClock]


class FetchResult:
    def __init__(
        self,
        id: int,
        data: str,
        fetch_time: float = 0.0,
        timestamp: datetime = None
    ):
        """Initialize a FetchResult with the echoed identifier, its payload and timing metadata."""
        self.id = id
        self.data = data
        self.fetch_time = fetch_time
        self.timestamp = timestamp or datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Union[int, str]]:
        """Return the public record shape: id and data only."""
        return {'id': self.id, 'data': self.data}

    def __eq__(self, other) -> bool:
        if not isinstance(other, FetchResult):
            return NotImplemented
        return self.id == other.id and self.data == other.data

    def __hash__(self) -> int:
        return hash((self.id, self.data))

    def __repr__(self) -> str:
        return f"FetchResult(id={self.id!r}, data={self.data!r})"


class ParityPolicy:
    """Even identifiers succeed, odd ones are rejected."""

    name = 'parity'

    def check(self, identifier: int) -> None:
        if identifier % 2 != 0:
            raise InvalidIdentifierParity(identifier)

    def payload(self, identifier: int) -> str:
        return "Some data"


class RangePolicy:
    """Identifiers within [low, high] succeed, everything else is rejected."""

    name = 'range'

    def __init__(self, low: int = 1, high: int = 3):
        if low > high:
            raise ValueError(f"Empty identifier range: {low} > {high}")
        self.low = low
        self.high = high

    def check(self, identifier: int) -> None:
        if identifier < self.low or identifier > self.high:
            raise InvalidIdentifierRange(identifier, self.low, self.high)

    def payload(self, identifier: int) -> str:
        return f"Data for ID {identifier}"


Policy = Union[ParityPolicy, RangePolicy]


class SimulatedFetcher:
    def __init__(self, delay: float = 2.0, clock: Optional[Clock] = None, policy: Optional[Policy] = None):
        """Initialize the fetcher with a fixed latency, a clock to wait on and an acceptance policy."""
        if delay < 0:
            raise ValueError(f"Delay must not be negative: {delay}")
        self.delay = delay
        self.clock = clock or AsyncioClock()
        self.policy = policy or ParityPolicy()

    async def fetch(self, identifier: int) -> FetchResult:
        """Wait out the delay, then return a FetchResult or raise a FetchFailure."""
        self._validate(identifier)

        start_time = self.clock.now()
        logger.debug("fetch_started", id=identifier, delay=self.delay)

        await self.clock.sleep(self.delay)
        fetch_time = self.clock.now() - start_time

        try:
            self.policy.check(identifier)
        except FetchFailure as e:
            logger.debug("fetch_rejected", id=identifier, reason=e.message, fetch_time=fetch_time)
            raise

        return FetchResult(
            id=identifier,
            data=self.policy.payload(identifier),
            fetch_time=fetch_time
        )

    def request(self, identifier: int) -> Promise[FetchResult]:
        """Start a fetch right away and return a Promise of its result."""
        self._validate(identifier)
        return Promise(self.fetch(identifier))

    def _validate(self, identifier: int) -> None:
        if isinstance(identifier, bool) or not isinstance(identifier, int):
            raise TypeError(f"Identifier must be an integer, got {type(identifier).__name__}")


def create_fetcher(config: Config = None, clock: Optional[Clock] = None) -> SimulatedFetcher:
    """Create a SimulatedFetcher from the fetcher section of a Config."""
    settings = (config or Config()).fetcher

    policy_name = settings.get('policy', 'parity')
    if policy_name == 'parity':
        policy = ParityPolicy()
    elif policy_name == 'range':
        bounds = settings.get('range') or {}
        policy = RangePolicy(low=bounds.get('low', 1), high=bounds.get('high', 3))
    else:
        raise ValueError(f"Unknown fetcher policy: {policy_name}")

    return SimulatedFetcher(
        delay=float(settings.get('delay', 2.0)),
        clock=clock,
        policy=policy
    )
