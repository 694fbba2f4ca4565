"""Cancellable repeating callbacks.

Engines never keep raw timer identifiers around. They ask a ``Scheduler`` for a
``RepeatingTask`` handle and cancel that handle when they stop or pause. A
cancelled handle never invokes its callback again, even if a tick was already
due when ``cancel()`` was called.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable

from worklog_cli.utils.logger import get_component_logger

logger = get_component_logger("scheduler")

TickCallback = Callable[[], object]


class RepeatingTask(ABC):
    """Handle to a callback that fires every ``interval`` seconds."""

    def __init__(self, interval: float, callback: TickCallback):
        self.interval = interval
        self.callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop future invocations. Safe to call more than once."""
        self._cancelled = True

    def fire(self) -> None:
        """Invoke the callback unless the handle has been cancelled."""
        if self._cancelled:
            return
        self.callback()


class Scheduler(ABC):
    """Creates repeating tasks."""

    @abstractmethod
    def schedule_repeating(
        self, interval: float, callback: TickCallback
    ) -> RepeatingTask:
        """Run *callback* every *interval* seconds until the handle is cancelled."""


class AsyncioRepeatingTask(RepeatingTask):
    """Repeating task backed by an ``asyncio.Task`` on the running loop."""

    def __init__(self, interval: float, callback: TickCallback):
        super().__init__(interval, callback)
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="worklog-tick"
        )

    async def _run(self) -> None:
        while not self._cancelled:
            await asyncio.sleep(self.interval)
            try:
                self.fire()
            except Exception:
                logger.exception("Tick callback failed")

    def cancel(self) -> None:
        super().cancel()
        if not self._task.done():
            self._task.cancel()


class AsyncioScheduler(Scheduler):
    """Scheduler for code running inside an asyncio event loop."""

    def schedule_repeating(
        self, interval: float, callback: TickCallback
    ) -> RepeatingTask:
        return AsyncioRepeatingTask(interval, callback)


class ManualRepeatingTask(RepeatingTask):
    """Repeating task that only fires when the owner says so."""


class ManualScheduler(Scheduler):
    """Scheduler driven by explicit ``advance()`` calls.

    Used by tests and by callers that own their own loop (for example a
    ``rich.live.Live`` refresh loop).
    """

    def __init__(self) -> None:
        self.tasks: list[ManualRepeatingTask] = []

    def schedule_repeating(
        self, interval: float, callback: TickCallback
    ) -> RepeatingTask:
        task = ManualRepeatingTask(interval, callback)
        self.tasks.append(task)
        return task

    @property
    def active_tasks(self) -> list[ManualRepeatingTask]:
        return [task for task in self.tasks if not task.cancelled]

    def advance(self, ticks: int = 1) -> None:
        """Fire every active task *ticks* times."""
        for _ in range(ticks):
            for task in self.active_tasks:
                task.fire()
