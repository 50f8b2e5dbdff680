"""Cooperative timers for the chaos animations.

Everything here runs on the asyncio event loop thread, so callbacks never
overlap with each other or with pointer handlers.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class PeriodicTask:
    """Invoke ``callback`` every ``interval`` seconds until stopped.

    At most one loop runs per instance; :meth:`start` on a running task is a
    no-op. Also usable as a context manager that starts on enter and always
    stops on exit.
    """

    def __init__(self, interval: float, callback: Callable[[], None], name: str = "periodic") -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.callback = callback
        self.name = name
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """Schedule the loop on the running event loop; ``False`` if already running."""
        if self.running:
            return False
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name=self.name)
        return True

    def stop(self) -> bool:
        """Cancel the loop; ``False`` if it was not running."""
        task, self._task = self._task, None
        if task is None or task.done():
            return False
        task.cancel()
        return True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.callback()
            except Exception:
                LOGGER.exception("Periodic task %s failed; stopping", self.name)
                self._task = None
                return

    def __enter__(self) -> "PeriodicTask":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()


class Debouncer:
    """Run ``callback`` once ``delay`` seconds after the latest :meth:`trigger`."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        if delay < 0:
            raise ValueError("delay must not be negative")
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        """Cancel any pending call and schedule a fresh one."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self.callback()
