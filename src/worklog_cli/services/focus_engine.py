"""Pomodoro focus-cycle engine.

Cycles work phases and breaks entirely in memory; only the settings are
persisted. A finished phase pauses the engine and reports a
``CycleCompletion``. Starting the suggested next phase is left to the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from worklog_cli.models.focus import (
    MODE_LABELS,
    PHASE_MODES,
    CycleCompletion,
    FocusMode,
    FocusSettings,
    FocusSettingsStore,
    PhaseMode,
)
from worklog_cli.utils.logger import get_component_logger
from worklog_cli.utils.scheduler import RepeatingTask, Scheduler
from worklog_cli.utils.time_format import format_countdown

logger = get_component_logger("focus")

CompletionListener = Callable[[CycleCompletion], None]


class FocusCycleEngine:
    """State machine for work / short break / long break phases."""

    def __init__(
        self,
        settings_store: FocusSettingsStore,
        scheduler: Scheduler,
        on_complete: CompletionListener | None = None,
        tick_interval: float = 1.0,
    ):
        self.settings_store = settings_store
        self.scheduler = scheduler
        self.on_complete = on_complete
        self.tick_interval = tick_interval

        self.settings: FocusSettings = settings_store.load()
        self.mode: FocusMode = "idle"
        self.is_running = False
        self.remaining_seconds = 0
        self.completed_work_sessions = 0
        self.is_linked_to_session = False

        self._phase_duration: int | None = None
        self._tick_handle: RepeatingTask | None = None

    def set_on_complete(self, listener: CompletionListener | None) -> None:
        self.on_complete = listener

    # ----- Derived values -----

    @property
    def current_duration(self) -> int:
        """Length of the current phase in seconds (work length while idle)."""
        if self.mode != "idle" and self._phase_duration is not None:
            return self._phase_duration
        return self.settings.duration_seconds(self.mode)

    @property
    def progress(self) -> float:
        """Percent of the current phase elapsed, 0-100."""
        duration = self.current_duration
        if self.mode == "idle" or duration <= 0:
            return 0.0
        return (duration - self.remaining_seconds) / duration * 100

    @property
    def mode_label(self) -> str:
        return MODE_LABELS.get(self.mode, MODE_LABELS["idle"])

    @property
    def formatted_time(self) -> str:
        return format_countdown(self.remaining_seconds)

    # ----- Commands -----

    def start(self, mode: PhaseMode = "work", linked: bool = False) -> None:
        """Begin a fresh phase of *mode*, replacing whatever was active."""
        if mode not in PHASE_MODES:
            raise ValueError(f"Cannot start focus phase {mode!r}")

        self._cancel_tick()
        self.mode = mode
        self._phase_duration = self.settings.duration_seconds(mode)
        self.remaining_seconds = self._phase_duration
        self.is_linked_to_session = linked
        self.is_running = True
        self._schedule_tick()

        logger.info(
            "Focus phase %s started (%ss, linked=%s)",
            mode,
            self._phase_duration,
            linked,
        )

    def tick(self) -> CycleCompletion | None:
        """Advance one second; returns the completion when the phase ends."""
        if not self.is_running:
            return None

        self.remaining_seconds = max(0, self.remaining_seconds - 1)
        if self.remaining_seconds == 0:
            return self._complete()
        return None

    def pause(self) -> None:
        self._cancel_tick()
        self.is_running = False

    def resume(self) -> None:
        if self.mode == "idle" or self.is_running or self.remaining_seconds <= 0:
            return
        self.is_running = True
        self._schedule_tick()

    def skip(self) -> CycleCompletion | None:
        """Finish the current phase now, counting it as completed.

        Returns None when idle or when the phase has already completed and
        is waiting for the next one to be started.
        """
        if self.mode == "idle" or (not self.is_running and self.remaining_seconds <= 0):
            return None
        self.remaining_seconds = 0
        return self._complete()

    def stop(self) -> None:
        """Reset the cycle completely."""
        self._cancel_tick()
        self.mode = "idle"
        self.is_running = False
        self.remaining_seconds = 0
        self.completed_work_sessions = 0
        self.is_linked_to_session = False
        self._phase_duration = None
        logger.info("Focus cycle stopped")

    def update_settings(self, **changes: Any) -> FocusSettings:
        """Merge *changes* into the settings and persist them.

        The running phase keeps the duration it started with.

        Raises:
            pydantic.ValidationError: If a value is out of range
        """
        merged = self.settings.model_dump()
        merged.update({key: value for key, value in changes.items() if value is not None})
        self.settings = FocusSettings.model_validate(merged)
        self.settings_store.save(self.settings)
        return self.settings

    # ----- Internals -----

    def _complete(self) -> CycleCompletion:
        self.pause()
        completed_mode: PhaseMode = self.mode  # type: ignore[assignment]

        if completed_mode == "work":
            self.completed_work_sessions += 1
            next_mode = self.settings.next_break(self.completed_work_sessions)
        else:
            next_mode = "work"

        completion = CycleCompletion(
            completed_mode=completed_mode,
            next_mode=next_mode,
            completed_work_sessions=self.completed_work_sessions,
        )
        logger.info(
            "Focus phase %s complete (%d work sessions), next: %s",
            completed_mode,
            self.completed_work_sessions,
            next_mode,
        )

        if self.on_complete is not None:
            self.on_complete(completion)
        return completion

    def _schedule_tick(self) -> None:
        self._tick_handle = self.scheduler.schedule_repeating(
            self.tick_interval, self.tick
        )

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
