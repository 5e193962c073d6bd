"""Self-rearming autosave timer."""

import asyncio
from typing import Callable, Optional

from courier.utils.logging import get_logger

logger = get_logger(__name__)


class AutosaveScheduler:
    """Single-shot timer on the running event loop, re-armed after each tick.

    The next tick is only scheduled once ``on_tick`` has returned, so ticks
    never pile up behind a slow handler. After :meth:`stop` nothing is
    rescheduled.
    """

    def __init__(self, interval: float, on_tick: Callable[[], None]):
        if interval <= 0:
            raise ValueError(f"Autosave interval must be positive, got {interval}")
        self.interval = interval
        self.on_tick = on_tick
        self._timer: Optional[asyncio.TimerHandle] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Arm the first tick. Must be called from within the event loop."""
        if self._running:
            return
        self._running = True
        self._arm()
        logger.debug(f"Autosave started (interval: {self.interval}s)")

    def stop(self) -> None:
        """Cancel the pending tick and stop rescheduling."""
        self._running = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        logger.debug("Autosave stopped")

    def _arm(self) -> None:
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        self._timer = None
        if not self._running:
            return
        try:
            self.on_tick()
        finally:
            if self._running:
                self._arm()
