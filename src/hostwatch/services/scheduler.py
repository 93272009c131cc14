"""Single-flight periodic task runner.

A PeriodicTask runs one cycle, then waits for the next tick that is still
in the future. Ticks that fall due while a cycle is running are dropped
rather than queued, so a task never overlaps itself. Shutdown is checked
between cycles only; a cycle in flight always completes.
"""

import asyncio
import logging
import math
import time
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

Cycle = Callable[[], Awaitable[Any]]


class PeriodicTask:
    """Runs ``cycle`` every ``interval`` seconds until ``shutdown`` is set.

    Args:
        name: Used in log messages.
        cycle: Coroutine function to call each tick.
        interval: Seconds between tick starts.
        shutdown: Event shared by all tasks of a process.
        clock: Monotonic clock, replaceable in tests.
    """

    def __init__(
        self,
        name: str,
        cycle: Cycle,
        interval: float,
        shutdown: asyncio.Event,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.name = name
        self._cycle = cycle
        self._interval = interval
        self._shutdown = shutdown
        self._clock = clock
        self._lock = asyncio.Lock()
        self.runs = 0
        self.dropped_ticks = 0

    @property
    def running(self) -> bool:
        """True while a cycle is in flight."""
        return self._lock.locked()

    async def trigger(self) -> bool:
        """Run one cycle now unless one is already in flight.

        Returns:
            False if the call was dropped because a cycle was running.
        """
        if self._lock.locked():
            return False
        async with self._lock:
            try:
                await self._cycle()
            except Exception:
                logger.exception("%s cycle failed", self.name)
            finally:
                self.runs += 1
        return True

    async def run(self) -> None:
        """Loop until the shutdown event is set."""
        logger.info("Starting %s with interval: %.1fs", self.name, self._interval)
        next_tick = self._clock()
        while not self._shutdown.is_set():
            ran = await self.trigger()
            if not ran:
                self.dropped_ticks += 1
            next_tick = self._schedule_after(next_tick)
            delay = max(0.0, next_tick - self._clock())
            try:
                await asyncio.wait_for(self._shutdown.wait(), timeout=delay)
            except TimeoutError:
                continue
        logger.info("%s stopped", self.name)

    def _schedule_after(self, last_tick: float) -> float:
        """Return the first tick after now on the ``last_tick`` grid.

        Ticks skipped because the cycle overran are counted as dropped.
        """
        now = self._clock()
        elapsed_ticks = max(1, math.floor((now - last_tick) / self._interval) + 1)
        missed = elapsed_ticks - 1
        if missed:
            self.dropped_ticks += missed
            logger.warning(
                "%s cycle overran its interval, dropped %d tick(s)", self.name, missed
            )
        return last_tick + elapsed_ticks * self._interval
