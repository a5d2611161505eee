"""Single-timer debouncer on top of the asyncio event loop."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from holiday_checker.logging import logger

AsyncCallback = Callable[[], Awaitable[Any]]


class Debouncer:
    """Runs the most recently scheduled callback once input pauses.

    At most one timer is pending at a time: ``schedule`` cancels the previous
    timer before arming a new one. A fired callback runs as a task that is
    tracked until it completes; ``cancel`` and ``close`` never interrupt it.
    """

    def __init__(self, delay: float = 0.5, *, name: str = "debounce") -> None:
        self.delay = delay
        self.name = name
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[Any]] = set()
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(self, callback: AsyncCallback) -> None:
        if self._closed:
            logger.warning("debounce_schedule_after_close", debouncer=self.name)
            return
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback)

    def cancel(self) -> None:
        """Drop the pending timer, if any. Safe to call repeatedly."""

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def close(self) -> None:
        self.cancel()
        self._closed = True

    async def join(self) -> None:
        """Wait for callbacks that already fired to finish."""

        while True:
            running = {task for task in self._tasks if not task.done()}
            if not running:
                return
            await asyncio.wait(running)

    def _fire(self, callback: AsyncCallback) -> None:
        self._handle = None
        task = asyncio.ensure_future(callback())
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "debounced_callback_failed",
                debouncer=self.name,
                exception_type=exc.__class__.__name__,
                error=str(exc),
            )


__all__ = ["AsyncCallback", "Debouncer"]
