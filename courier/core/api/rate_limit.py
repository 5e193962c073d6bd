"""Minimum-interval rate limiter shared by all network calls."""

import asyncio
import time
from typing import Callable

from courier.utils.errors import InvalidConfigError
from courier.utils.logging import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """Spaces calls at least ``1 / requests_per_second`` apart."""

    def __init__(
        self,
        requests_per_second: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if requests_per_second <= 0:
            raise InvalidConfigError(
                f"requests_per_second must be positive, got {requests_per_second}"
            )
        self.interval = 1.0 / requests_per_second
        self._clock = clock
        self._next_allowed = 0.0
        self._lock = asyncio.Lock()

    async def wait(self) -> None:
        """Wait until a slot is free, then take it."""
        async with self._lock:
            delay = self._next_allowed - self._clock()
            if delay > 0:
                logger.debug(f"Rate limited, waiting {delay:.3f}s")
                await asyncio.sleep(delay)
            self._next_allowed = max(self._clock(), self._next_allowed) + self.interval
