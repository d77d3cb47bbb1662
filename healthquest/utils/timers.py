"""Cancellable timers on the asyncio event loop

Everything runs on one event loop, so callbacks never overlap: a callback
either runs to completion or not at all. After cancel() a timer never fires
again.
"""
import asyncio
import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Anything with a cancel() method"""

    def cancel(self) -> None:
        ...


class RepeatingTimer:
    """
    Invokes a callback every `interval` seconds until cancelled.

    The loop runs as a background task, like a heartbeat.
    """

    def __init__(self, interval: float, callback: Callable[[], None]):
        """
        Args:
            interval: Seconds between callbacks
            callback: Zero-argument function invoked on each tick
        """
        self.interval = interval
        self.callback = callback
        self._task: Optional[asyncio.Task] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def _tick_loop(self):
        """Background loop that fires the callback every interval"""
        while self._running:
            await asyncio.sleep(self.interval)
            if not self._running:
                break
            try:
                self.callback()
            except Exception as e:
                logger.error(f"Unexpected error in timer callback: {e}", exc_info=True)

    def start(self) -> None:
        """Start ticking. Must be called with a running event loop."""
        if self._running:
            logger.warning("Repeating timer already running")
            return

        loop = asyncio.get_running_loop()
        self._running = True
        self._task = loop.create_task(self._tick_loop())

    def cancel(self) -> None:
        """Stop ticking. Safe to call from inside the callback."""
        if not self._running:
            return

        self._running = False

        if self._task is not None:
            try:
                current = asyncio.current_task()
            except RuntimeError:
                current = None  # no running loop
            if self._task is not current:
                self._task.cancel()
        self._task = None


class AsyncioScheduler:
    """Hands out repeating and one-shot timers bound to the running loop"""

    def call_every(self, interval: float, callback: Callable[[], None]) -> RepeatingTimer:
        timer = RepeatingTimer(interval, callback)
        timer.start()
        return timer

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)
