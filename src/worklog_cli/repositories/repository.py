"""Repository abstraction layer for worklog.

Abstract base classes (ports) for persistence. The timer engine only talks to
these interfaces; the SQLite adapters in ``worklog_cli.adapters.sqlite`` are
one implementation of them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager, nullcontext
from datetime import datetime

from worklog_cli.models import (
    Project,
    ProjectCreate,
    ProjectUpdate,
    Task,
    TaskCreate,
    TimeSession,
)


class Repository(ABC):
    """Common base for the ports below."""

    def transaction(self) -> AbstractContextManager[object]:
        """Group writes from every repository on the same store.

        Writes made inside the block are committed together when it exits,
        or not at all if it raises. Stores without transactions use a no-op.
        """
        return nullcontext()


class SessionRepository(Repository):
    """Durable collection of time sessions.

    At most one session may be open (``end_time`` unset) at any moment.
    Callers must check ``find_open_session()`` before ``insert_open_session()``.
    """

    @abstractmethod
    async def find_open_session(self) -> TimeSession | None:
        """Return the session with no end time, or None if nothing is running."""

    @abstractmethod
    async def insert_open_session(
        self, task_id: str, start_time: datetime | None = None
    ) -> str:
        """Create an open session for *task_id* and return its id.

        Args:
            task_id: Owning task
            start_time: Start instant; defaults to now

        Raises:
            sqlite3.IntegrityError (or adapter equivalent): If a session is
                already open
        """

    @abstractmethod
    async def close_session(
        self, session_id: str, end_time: datetime, duration_seconds: int
    ) -> bool:
        """Close an open session.

        Returns:
            True on success, False if no open session has this id
        """

    @abstractmethod
    async def get(self, session_id: str) -> TimeSession | None:
        """Get a session by id."""

    @abstractmethod
    async def list_by_task(self, task_id: str) -> list[TimeSession]:
        """All sessions of a task, newest first."""

    @abstractmethod
    async def list_recent(self, limit: int = 20) -> list[TimeSession]:
        """Most recent sessions across all tasks, newest first."""

    @abstractmethod
    async def list_all(self) -> list[TimeSession]:
        """Every session, oldest first."""

    @abstractmethod
    async def add_manual_session(
        self, task_id: str, seconds: int, now: datetime | None = None
    ) -> str | None:
        """Record already-finished work of *seconds* ending at *now*.

        Returns:
            The new session id, or None when *seconds* is not positive
        """

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """Delete a closed session. Open sessions are never deleted."""

    @abstractmethod
    async def total_seconds_by_task(self, task_id: str) -> int:
        """Sum of closed durations for a task."""

    @abstractmethod
    async def total_seconds_by_tasks(self, task_ids: list[str]) -> int:
        """Sum of closed durations over several tasks."""

    @abstractmethod
    async def import_session(self, session: TimeSession) -> None:
        """Insert a session exactly as given (backup restore)."""


class TaskRepository(Repository):
    """Task persistence with soft delete."""

    @abstractmethod
    async def get(self, task_id: str) -> Task | None:
        """Get a task by id, including tasks in the trash."""

    @abstractmethod
    async def list_all(
        self, project_id: str | None = None, include_completed: bool = True
    ) -> list[Task]:
        """Tasks not in the trash, optionally limited to one project."""

    @abstractmethod
    async def list_deleted(self) -> list[Task]:
        """Tasks in the trash."""

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a task."""

    @abstractmethod
    async def rename(self, task_id: str, name: str) -> Task | None:
        """Change a task's name."""

    @abstractmethod
    async def set_completed(self, task_id: str, completed: bool) -> Task | None:
        """Mark a task as completed or not completed."""

    @abstractmethod
    async def soft_delete(self, task_id: str) -> bool:
        """Move a task to the trash. Its sessions are kept."""

    @abstractmethod
    async def restore(self, task_id: str) -> bool:
        """Take a task out of the trash."""

    @abstractmethod
    async def purge(self, task_id: str) -> bool:
        """Permanently delete a task and all its sessions."""

    @abstractmethod
    async def purge_deleted(self) -> int:
        """Permanently delete every task in the trash. Returns the count."""

    @abstractmethod
    async def import_task(self, task: Task) -> None:
        """Insert a task exactly as given (backup restore)."""


class ProjectRepository(Repository):
    """Project persistence with soft delete cascading to tasks."""

    @abstractmethod
    async def get(self, project_id: str) -> Project | None:
        """Get a project by id, including projects in the trash."""

    @abstractmethod
    async def list_all(self) -> list[Project]:
        """Projects not in the trash."""

    @abstractmethod
    async def list_deleted(self) -> list[Project]:
        """Projects in the trash."""

    @abstractmethod
    async def add(self, project_data: ProjectCreate) -> Project:
        """Create a project."""

    @abstractmethod
    async def update(self, project_id: str, updates: ProjectUpdate) -> Project | None:
        """Update provided fields of a project."""

    @abstractmethod
    async def soft_delete(self, project_id: str) -> bool:
        """Move a project and its live tasks to the trash."""

    @abstractmethod
    async def restore(self, project_id: str) -> bool:
        """Take a project and its tasks out of the trash."""

    @abstractmethod
    async def purge(self, project_id: str) -> bool:
        """Permanently delete a project, its tasks and their sessions."""

    @abstractmethod
    async def import_project(self, project: Project) -> None:
        """Insert a project exactly as given (backup restore)."""
