"""Pomodoro cycle vocabulary: modes, settings and completion results."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

FocusMode = Literal["idle", "work", "short_break", "long_break"]
PhaseMode = Literal["work", "short_break", "long_break"]

PHASE_MODES: tuple[PhaseMode, ...] = ("work", "short_break", "long_break")

MODE_LABELS: dict[str, str] = {
    "work": "Work",
    "short_break": "Short break",
    "long_break": "Long break",
    "idle": "Ready",
}


class FocusSettings(BaseModel):
    """Configuration for Pomodoro cycling (durations in minutes)."""

    work_minutes: int = Field(default=25, ge=0)
    short_break_minutes: int = Field(default=5, ge=0)
    long_break_minutes: int = Field(default=15, ge=0)
    sessions_until_long_break: int = Field(default=4, ge=1)

    def duration_seconds(self, mode: str) -> int:
        """Length of *mode* in seconds; unknown modes and idle use the work length."""
        if mode == "short_break":
            return self.short_break_minutes * 60
        if mode == "long_break":
            return self.long_break_minutes * 60
        return self.work_minutes * 60

    def next_break(self, completed_work_sessions: int) -> PhaseMode:
        """Break that follows the work session bringing the count to *completed_work_sessions*."""
        if completed_work_sessions % self.sessions_until_long_break == 0:
            return "long_break"
        return "short_break"


@dataclass(frozen=True)
class CycleCompletion:
    """What just finished and what should come next.

    The engine does not start ``next_mode`` itself; the caller decides.
    """

    completed_mode: PhaseMode
    next_mode: PhaseMode
    completed_work_sessions: int

    @property
    def is_long_break_next(self) -> bool:
        return self.next_mode == "long_break"
