"""
Entrypoint: load config, init logging, run every consumption pattern
against the simulated fetcher
"""

import asyncio
import structlog
from dotenv import load_dotenv
from fetchsim.config import Config
from fetchsim.fetcher import RangePolicy, SimulatedFetcher, create_fetcher
from fetchsim.log import setup_logging
from fetchsim.worker import FetchWorker


async def main():
    """Initialize dependencies and run the demo scenarios concurrently"""
    # Load environment variables from .env file
    load_dotenv()

    config = Config()
    setup_logging(config.logging)
    logger = structlog.get_logger(__name__)

    fetcher = create_fetcher(config)
    worker = FetchWorker(fetcher=fetcher)

    # Range-validated variant answers in half the time and accepts ids 1..3
    range_worker = FetchWorker(fetcher=SimulatedFetcher(delay=fetcher.delay / 2, policy=RangePolicy(1, 3)))

    logger.info("demo_started", delay=fetcher.delay, policy=fetcher.policy.name)

    await asyncio.gather(
        worker.chain(2),
        worker.chain(3),
        worker.get_data(3),
        worker.get_data(2),
        worker.get_data(31),
        worker.fetch_all([1, 2, 3]),
        worker.fetch_first([2, 4, 6]),
        worker.fetch_settled([1, 2]),
        range_worker.fetch_all([1, 2, 3]),
        range_worker.fetch_all([1, 2, 3, 4]),
    )

    logger.info("demo_finished")


if __name__ == "__main__":
    asyncio.run(main())
