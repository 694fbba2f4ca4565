"""Session service - manual time entries and session history."""

from __future__ import annotations

from worklog_cli.models import TimeSession
from worklog_cli.repositories import SessionRepository, TaskRepository
from worklog_cli.utils.errors import ConflictError, InvalidArgumentError, NotFoundError
from worklog_cli.utils.logger import get_component_logger
from worklog_cli.utils.time_format import Clock, utc_now

logger = get_component_logger("sessions")


class SessionService:
    """Manual entries are created already closed, ending now."""

    def __init__(
        self,
        session_repository: SessionRepository,
        task_repository: TaskRepository,
        clock: Clock = utc_now,
    ):
        self.repository = session_repository
        self.task_repository = task_repository
        self.clock = clock

    async def add_manual(self, task_id: str, seconds: int) -> TimeSession:
        """Record *seconds* of finished work on a task.

        Raises:
            InvalidArgumentError: If *seconds* is not positive
            NotFoundError: If the task does not exist or is in the trash
        """
        if seconds <= 0:
            raise InvalidArgumentError("Duration must be greater than zero")

        task = await self.task_repository.get(task_id)
        if task is None or task.is_deleted:
            raise NotFoundError(f"Task not found: {task_id}")

        session_id = await self.repository.add_manual_session(
            task.id, seconds, now=self.clock()
        )
        if session_id is None:
            raise InvalidArgumentError("Duration must be greater than zero")

        logger.info("Manual entry added: %ss on task %s", seconds, task.id)
        session = await self.repository.get(session_id)
        assert session is not None
        return session

    async def list_sessions(
        self, task_id: str | None = None, limit: int = 20
    ) -> list[TimeSession]:
        if task_id is not None:
            return (await self.repository.list_by_task(task_id))[:limit]
        return await self.repository.list_recent(limit)

    async def delete_session(self, reference: str) -> TimeSession:
        """Delete a closed session by id or unique id prefix."""
        session = await self._resolve(reference)
        if session.is_open:
            raise ConflictError("Cannot delete the running session; stop the timer first")
        await self.repository.delete(session.id)
        logger.info("Session deleted: %s", session.id)
        return session

    async def _resolve(self, reference: str) -> TimeSession:
        if not reference.strip():
            raise InvalidArgumentError("Session reference must not be empty")
        session = await self.repository.get(reference)
        if session is not None:
            return session

        matches = [s for s in await self.repository.list_all() if s.id.startswith(reference)]
        if len(matches) == 1:
            return matches[0]
        if not matches:
            raise NotFoundError(f"Session not found: {reference}")
        raise InvalidArgumentError(f"Session reference '{reference}' is ambiguous")
