"""Timer engine - the single running time session.

At most one time session is open across the whole store. The store, not
process memory, is authoritative for whether a timer is running:
``recover()`` rebuilds the in-memory view from the open session after a
restart.

Rules:
- ``start`` while running and ``stop`` while idle are soft failures: they
  return False and log a warning.
- In-memory state changes only after the awaited store call succeeded, so a
  store failure leaves the engine exactly as it was.
- ``elapsed_seconds`` is recomputed from ``start_time`` on every tick, never
  accumulated, so missed ticks do not drift.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime

from worklog_cli.models import Task
from worklog_cli.repositories import SessionRepository, TaskRepository
from worklog_cli.utils.logger import get_component_logger
from worklog_cli.utils.scheduler import RepeatingTask, Scheduler
from worklog_cli.utils.time_format import (
    Clock,
    elapsed_whole_seconds,
    round_half_up,
    seconds_between,
    utc_now,
)

logger = get_component_logger("timer")

# Errors a store adapter may raise for I/O problems
STORE_ERRORS: tuple[type[Exception], ...] = (sqlite3.Error, OSError)

TICK_INTERVAL_SECONDS = 1.0


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of the timer for display."""

    is_running: bool
    active_session_id: str | None
    active_task_id: str | None
    active_task: Task | None
    start_time: datetime | None
    elapsed_seconds: int


class TimerEngine:
    """Owns the one open time session of the application."""

    def __init__(
        self,
        session_repository: SessionRepository,
        task_repository: TaskRepository,
        scheduler: Scheduler,
        clock: Clock = utc_now,
        tick_interval: float = TICK_INTERVAL_SECONDS,
    ):
        self.session_repository = session_repository
        self.task_repository = task_repository
        self.scheduler = scheduler
        self.clock = clock
        self.tick_interval = tick_interval

        self.active_session_id: str | None = None
        self.active_task_id: str | None = None
        self.active_task: Task | None = None
        self.start_time: datetime | None = None
        self.elapsed_seconds: int = 0

        self._tick_handle: RepeatingTask | None = None

    @property
    def is_running(self) -> bool:
        return self.active_session_id is not None

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            is_running=self.is_running,
            active_session_id=self.active_session_id,
            active_task_id=self.active_task_id,
            active_task=self.active_task,
            start_time=self.start_time,
            elapsed_seconds=self.elapsed_seconds,
        )

    # ----- Lifecycle -----

    async def recover(self) -> bool:
        """Restore a session left open by a previous process.

        Returns:
            True if an open session was found and the timer is now running
        """
        if self.is_running:
            self.tick()
            return True

        try:
            session = await self.session_repository.find_open_session()
        except STORE_ERRORS as e:
            logger.error("Failed to check for an active timer: %s", e)
            return False

        if session is None:
            return False

        self.active_session_id = session.id
        self.active_task_id = session.task_id
        self.start_time = session.start_time
        self.active_task = await self._hydrate_task(session.task_id)
        self.tick()
        self._start_ticking()

        logger.info(
            "Recovered running timer %s for task %s (%ss elapsed)",
            session.id,
            session.task_id,
            self.elapsed_seconds,
        )
        return True

    async def start(self, task_id: str) -> bool:
        """Open a new session for *task_id*.

        Returns:
            False if a timer is already running or the store failed
        """
        if self.is_running:
            logger.warning(
                "Timer already running for task %s; stop it before starting another",
                self.active_task_id,
            )
            return False

        start_time = self.clock()
        try:
            session_id = await self.session_repository.insert_open_session(
                task_id, start_time=start_time
            )
        except STORE_ERRORS as e:
            logger.error("Failed to start timer for task %s: %s", task_id, e)
            return False

        self.active_session_id = session_id
        self.active_task_id = task_id
        self.start_time = start_time
        self.elapsed_seconds = 0
        self.active_task = await self._hydrate_task(task_id)
        self._start_ticking()

        logger.info("Timer started for task %s (session %s)", task_id, session_id)
        return True

    async def stop(self) -> bool:
        """Close the running session, fixing its duration.

        Returns:
            False if no timer is running, the store failed, or the open
            session no longer exists in the store
        """
        if not self.is_running:
            logger.warning("Timer is not running")
            return False

        assert self.active_session_id is not None and self.start_time is not None
        session_id = self.active_session_id
        end_time = self.clock()
        duration = max(0, round_half_up(seconds_between(self.start_time, end_time)))

        try:
            closed = await self.session_repository.close_session(
                session_id, end_time, duration
            )
        except STORE_ERRORS as e:
            logger.error("Failed to stop timer session %s: %s", session_id, e)
            return False

        self._clear()
        if not closed:
            logger.warning(
                "Open session %s was not found in the store; timer cleared", session_id
            )
            return False

        logger.info("Timer stopped: session %s, %ss", session_id, duration)
        return True

    def tick(self) -> int:
        """Recompute elapsed seconds from the wall clock."""
        if self.start_time is not None:
            self.elapsed_seconds = elapsed_whole_seconds(self.start_time, self.clock())
        return self.elapsed_seconds

    # ----- Internals -----

    async def _hydrate_task(self, task_id: str) -> Task | None:
        try:
            return await self.task_repository.get(task_id)
        except STORE_ERRORS as e:
            logger.warning("Could not load task %s for the timer display: %s", task_id, e)
            return None

    def _start_ticking(self) -> None:
        self._stop_ticking()
        self._tick_handle = self.scheduler.schedule_repeating(
            self.tick_interval, self.tick
        )

    def _stop_ticking(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _clear(self) -> None:
        self._stop_ticking()
        self.active_session_id = None
        self.active_task_id = None
        self.active_task = None
        self.start_time = None
        self.elapsed_seconds = 0
