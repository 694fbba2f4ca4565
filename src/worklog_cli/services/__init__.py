"""Services module for worklog - engines and business logic."""

from .focus_coordinator import FocusCoordinator
from .focus_engine import FocusCycleEngine
from .project_service import ProjectService
from .report_service import ReportService
from .session_service import SessionService
from .task_service import TaskService
from .timer_engine import TimerEngine, TimerSnapshot

__all__ = [
    "FocusCoordinator",
    "FocusCycleEngine",
    "ProjectService",
    "ReportService",
    "SessionService",
    "TaskService",
    "TimerEngine",
    "TimerSnapshot",
]
