"""Tests for the real and virtual clocks."""

import asyncio

import pytest

from fetchsim.clock import AsyncioClock, ManualClock


def test_manual_clock_starts_at_given_time() -> None:
    assert ManualClock().now() == 0.0
    assert ManualClock(start=10.0).now() == 10.0


def test_manual_clock_wakes_sleepers_in_deadline_order() -> None:
    async def scenario():
        clock = ManualClock()
        woke = []

        async def sleeper(name, seconds):
            await clock.sleep(seconds)
            woke.append((name, clock.now()))

        tasks = [
            asyncio.ensure_future(sleeper("slow", 2.0)),
            asyncio.ensure_future(sleeper("fast", 1.0)),
        ]

        await clock.advance(0.5)
        assert woke == []
        assert clock.pending == 2

        await clock.advance(0.5)
        assert woke == [("fast", 1.0)]

        await clock.advance(1.0)
        assert woke == [("fast", 1.0), ("slow", 2.0)]
        assert clock.pending == 0

        await asyncio.gather(*tasks)

    asyncio.run(scenario())


def test_manual_clock_equal_deadlines_wake_in_sleep_order() -> None:
    async def scenario():
        clock = ManualClock()
        woke = []

        async def sleeper(name):
            await clock.sleep(1.0)
            woke.append(name)

        tasks = [asyncio.ensure_future(sleeper(name)) for name in ("a", "b", "c")]
        await clock.advance(1.0)
        await asyncio.gather(*tasks)
        return woke

    assert asyncio.run(scenario()) == ["a", "b", "c"]


def test_manual_clock_advance_moves_time_without_sleepers() -> None:
    async def scenario():
        clock = ManualClock()
        await clock.advance(3.5)
        return clock.now()

    assert asyncio.run(scenario()) == 3.5


def test_manual_clock_rejects_negative_advance() -> None:
    async def scenario():
        with pytest.raises(ValueError):
            await ManualClock().advance(-1.0)

    asyncio.run(scenario())


def test_manual_clock_zero_sleep_returns_immediately() -> None:
    async def scenario():
        clock = ManualClock()
        await clock.sleep(0)
        return clock.pending

    assert asyncio.run(scenario()) == 0


def test_asyncio_clock_sleep_does_not_block_other_tasks() -> None:
    async def scenario():
        clock = AsyncioClock()
        ticks = []

        async def ticker():
            ticks.append("tick")

        start = clock.now()
        sleeper = asyncio.ensure_future(clock.sleep(0.02))
        await ticker()
        assert not sleeper.done()
        await sleeper
        return clock.now() - start, ticks

    elapsed, ticks = asyncio.run(scenario())
    assert ticks == ["tick"]
    assert elapsed >= 0.019
