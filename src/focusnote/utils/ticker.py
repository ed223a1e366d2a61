"""Cancellable periodic tick sources for the Pomodoro countdown.

A ticker calls a synchronous callback once per interval until stopped. The
countdown logic lives in the callback; tickers only decide *when* it runs.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from focusnote.utils.clock import FakeClock

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class Ticker(ABC):
    """Periodic scheduler interface."""

    @abstractmethod
    def start(self, callback: TickCallback) -> None:
        """Begin calling *callback* periodically. Restarts if already running."""

    @abstractmethod
    def stop(self) -> None:
        """Stop calling the callback. Safe to call when not running."""

    @property
    @abstractmethod
    def running(self) -> bool:
        """Whether the ticker is currently scheduled."""


class AsyncioTicker(Ticker):
    """Ticker driven by the running asyncio event loop."""

    def __init__(self, interval: float = 1.0):
        self.interval = interval
        self._task: asyncio.Task | None = None

    def start(self, callback: TickCallback) -> None:
        self.stop()
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(callback))

    async def _run(self, callback: TickCallback) -> None:
        loop = asyncio.get_running_loop()
        next_fire = loop.time() + self.interval
        while True:
            await asyncio.sleep(max(0.0, next_fire - loop.time()))
            next_fire += self.interval
            try:
                callback()
            except Exception:
                logger.exception("tick callback failed")

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def wait_stopped(self) -> None:
        """Await the cancellation of the current background task, if any."""
        task = self._task
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task


class ManualTicker(Ticker):
    """Ticker fired explicitly by the caller.

    When bound to a FakeClock, every fired tick also advances the clock by
    one interval so wall-clock and countdown stay in step.
    """

    def __init__(self, clock: FakeClock | None = None, interval: float = 1.0):
        self.clock = clock
        self.interval = interval
        self._callback: TickCallback | None = None
        self.fired = 0

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def tick(self, count: int = 1) -> int:
        """Fire up to *count* ticks; stops early if the ticker is stopped.

        Returns:
            Number of ticks actually fired
        """
        fired = 0
        for _ in range(count):
            if self._callback is None:
                break
            if self.clock is not None:
                self.clock.advance(self.interval)
            self._callback()
            fired += 1
        self.fired += fired
        return fired
