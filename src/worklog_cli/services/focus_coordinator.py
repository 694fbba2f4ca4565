"""Links the focus cycle to the task timer.

Linkage couples *start* only: a linked start opens a timer session and a work
phase together, but finishing or stopping either one leaves the other alone.
"""

from __future__ import annotations

from collections.abc import Callable

from worklog_cli.models.focus import CycleCompletion
from worklog_cli.services.focus_engine import FocusCycleEngine
from worklog_cli.services.timer_engine import TimerEngine
from worklog_cli.utils.logger import get_component_logger

logger = get_component_logger("coordinator")

Notifier = Callable[[CycleCompletion], None]


class FocusCoordinator:
    """Cross-engine policy between ``TimerEngine`` and ``FocusCycleEngine``."""

    def __init__(
        self,
        timer: TimerEngine,
        focus: FocusCycleEngine,
        notifier: Notifier | None = None,
    ):
        self.timer = timer
        self.focus = focus
        self.notifier = notifier
        focus.set_on_complete(self._handle_completion)

    async def start_linked(self, task_id: str) -> bool:
        """Start the timer for *task_id*, then a linked work phase.

        The focus cycle is left untouched when the timer refuses to start.
        """
        if not await self.timer.start(task_id):
            logger.warning("Linked focus not started: timer did not start for %s", task_id)
            return False
        self.focus.start("work", linked=True)
        return True

    def advance(self, completion: CycleCompletion) -> None:
        """Start the phase suggested by *completion*, keeping the linked flag."""
        self.focus.start(completion.next_mode, linked=self.focus.is_linked_to_session)

    async def stop_task(self) -> bool:
        return await self.timer.stop()

    def stop_focus(self) -> None:
        self.focus.stop()

    def _handle_completion(self, completion: CycleCompletion) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier(completion)
        except Exception:
            logger.exception("Focus completion notifier failed")
