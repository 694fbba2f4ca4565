"""Repository interfaces for worklog.

Implementations (adapters) live in ``worklog_cli.adapters.sqlite``.
"""

from .repository import ProjectRepository, SessionRepository, TaskRepository

__all__ = [
    "ProjectRepository",
    "SessionRepository",
    "TaskRepository",
]
