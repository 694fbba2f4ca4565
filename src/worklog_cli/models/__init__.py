"""Data models for worklog."""

from .core import (
    DEFAULT_PROJECT_COLOR,
    Project,
    ProjectCreate,
    ProjectUpdate,
    Task,
    TaskCreate,
    TimeSession,
)

__all__ = [
    "DEFAULT_PROJECT_COLOR",
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "Task",
    "TaskCreate",
    "TimeSession",
]
