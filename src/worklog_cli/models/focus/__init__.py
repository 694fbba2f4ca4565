"""Focus mode - Pomodoro cycle models."""

from .cycling import (
    MODE_LABELS,
    PHASE_MODES,
    CycleCompletion,
    FocusMode,
    FocusSettings,
    PhaseMode,
)
from .settings import FocusSettingsStore

__all__ = [
    "MODE_LABELS",
    "PHASE_MODES",
    "CycleCompletion",
    "FocusMode",
    "FocusSettings",
    "FocusSettingsStore",
    "PhaseMode",
]
