"""Pacing of completion calls."""

import asyncio
import time
from typing import Awaitable, Callable

from appforge.utils.logging import get_logger

logger = get_logger(__name__)


class FixedIntervalGate:
    """Guarantees at least ``interval`` seconds between consecutive acquisitions.

    The first acquisition never waits. An interval of zero disables pacing.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None
        self.total_waited = 0.0

    async def acquire(self) -> None:
        if self.interval == 0:
            return
        if self._last is not None:
            wait = self._last + self.interval - self._clock()
            if wait > 0:
                logger.debug("pacing.waiting", seconds=round(wait, 3))
                self.total_waited += wait
                await self._sleep(wait)
        self._last = self._clock()

    def reset(self) -> None:
        self._last = None
