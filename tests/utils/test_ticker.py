"""Unit tests for the tick sources."""

import asyncio

import pytest

from focusnote.utils.clock import FakeClock
from focusnote.utils.ticker import AsyncioTicker, ManualTicker


class TestManualTicker:
    def test_not_running_until_started(self):
        ticker = ManualTicker()
        assert not ticker.running
        assert ticker.tick(5) == 0

    def test_fires_callback_and_advances_clock(self):
        clock = FakeClock()
        start = clock.now()
        calls = []
        ticker = ManualTicker(clock)
        ticker.start(lambda: calls.append(clock.now()))

        assert ticker.tick(3) == 3
        assert len(calls) == 3
        assert (clock.now() - start).total_seconds() == 3
        assert ticker.fired == 3

    def test_stops_early_when_callback_stops_it(self):
        ticker = ManualTicker()
        count = {"n": 0}

        def callback():
            count["n"] += 1
            if count["n"] == 2:
                ticker.stop()

        ticker.start(callback)

        assert ticker.tick(10) == 2
        assert not ticker.running


class TestAsyncioTicker:
    @pytest.mark.asyncio
    async def test_ticks_until_stopped(self):
        ticker = AsyncioTicker(interval=0.01)
        calls = []
        ticker.start(lambda: calls.append(1))

        await asyncio.sleep(0.1)
        ticker.stop()
        count = len(calls)
        await asyncio.sleep(0.05)

        assert count >= 2
        assert len(calls) == count
        assert not ticker.running

    @pytest.mark.asyncio
    async def test_callback_errors_are_logged_not_raised(self, caplog):
        ticker = AsyncioTicker(interval=0.01)
        calls = []

        def callback():
            calls.append(1)
            raise RuntimeError("boom")

        ticker.start(callback)
        await asyncio.sleep(0.05)
        assert ticker.running
        ticker.stop()

        assert len(calls) >= 2
        assert "tick callback failed" in caplog.text

    @pytest.mark.asyncio
    async def test_wait_stopped(self):
        ticker = AsyncioTicker(interval=0.01)
        ticker.start(lambda: None)
        ticker.stop()
        await ticker.wait_stopped()
        assert not ticker.running

    def test_start_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            AsyncioTicker().start(lambda: None)
