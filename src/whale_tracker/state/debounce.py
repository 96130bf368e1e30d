"""Cancellable delayed execution for input-driven fetches."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

CoroutineFactory = Callable[[], Coroutine[Any, Any, Any]]


class Debouncer:
    """
    Run a coroutine once input has been quiet for ``delay`` seconds.

    Each ``schedule()`` cancels the pending timer before arming a new one, so
    only the last call within a quiet period fires. Cancelling only stops a
    timer that hasn't fired yet; a coroutine that already started keeps
    running, and its owner decides whether its result is still wanted.
    """

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None
        self._running: set[asyncio.Task[Any]] = set()
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def pending(self) -> bool:
        """True while a timer is armed and hasn't fired."""
        return self._handle is not None

    def schedule(self, factory: CoroutineFactory) -> None:
        """Replace any pending call with ``factory()``, run after ``delay``."""
        # Clear before disarming so waiters never see an idle gap between timers
        self._idle.clear()
        self._disarm()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, factory)

    def cancel(self) -> None:
        """Disarm the pending timer, if any."""
        self._disarm()
        self._update_idle()

    async def aclose(self) -> None:
        """Disarm the timer and cancel coroutines that already started."""
        self._disarm()
        running = list(self._running)
        for task in running:
            task.cancel()
        await asyncio.gather(*running, return_exceptions=True)
        self._update_idle()

    async def wait(self) -> None:
        """Wait until no timer is armed and no fired coroutine is running."""
        await self._idle.wait()

    def _disarm(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, factory: CoroutineFactory) -> None:
        self._handle = None
        task = asyncio.get_running_loop().create_task(factory())
        self._running.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._running.discard(task)
        self._update_idle()

    def _update_idle(self) -> None:
        if self._handle is None and not self._running:
            self._idle.set()
