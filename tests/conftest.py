import logging

import pytest
import structlog

from fetchsim.clock import ManualClock
from fetchsim.fetcher import SimulatedFetcher


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def fetcher(clock):
    return SimulatedFetcher(delay=2.0, clock=clock)


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("FETCHER_DELAY", "FETCHER_POLICY", "FETCHER_RANGE_LOW", "FETCHER_RANGE_HIGH",
                "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
