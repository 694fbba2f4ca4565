"""Task service - Business logic for task operations."""

from __future__ import annotations

from pydantic import ValidationError

from worklog_cli.models import Task, TaskCreate
from worklog_cli.repositories import ProjectRepository, SessionRepository, TaskRepository
from worklog_cli.services.resolve import resolve_reference
from worklog_cli.utils.errors import ConflictError, InvalidArgumentError, NotFoundError
from worklog_cli.utils.logger import get_component_logger

logger = get_component_logger("tasks")


class TaskService:
    """Service for task business logic, including the trash."""

    def __init__(
        self,
        task_repository: TaskRepository,
        project_repository: ProjectRepository,
        session_repository: SessionRepository,
    ):
        self.repository = task_repository
        self.project_repository = project_repository
        self.session_repository = session_repository

    async def list_tasks(
        self, project_id: str | None = None, include_completed: bool = True
    ) -> list[Task]:
        return await self.repository.list_all(
            project_id=project_id, include_completed=include_completed
        )

    async def list_trash(self) -> list[Task]:
        return await self.repository.list_deleted()

    async def resolve(self, reference: str, include_deleted: bool = False) -> Task:
        """Find one task by id, id prefix or name.

        Raises:
            NotFoundError: If nothing matches
            InvalidArgumentError: If the reference is ambiguous
        """
        candidates = await self.repository.list_all()
        if include_deleted:
            candidates += await self.repository.list_deleted()
        return resolve_reference(candidates, reference, kind="Task")

    async def create_task(self, project_id: str, name: str) -> Task:
        project = await self.project_repository.get(project_id)
        if project is None or project.is_deleted:
            raise NotFoundError(f"Project not found: {project_id}")

        try:
            data = TaskCreate(project_id=project.id, name=name.strip())
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid task: {e.errors()[0]['msg']}") from e

        task = await self.repository.add(data)
        logger.info("Task created: %s in project %s", task.id, project.id)
        return task

    async def rename_task(self, reference: str, name: str) -> Task:
        task = await self.resolve(reference)
        if not name.strip():
            raise InvalidArgumentError("Task name must not be empty")
        renamed = await self.repository.rename(task.id, name.strip())
        if renamed is None:
            raise NotFoundError(f"Task not found: {reference}")
        return renamed

    async def set_completed(self, reference: str, completed: bool = True) -> Task:
        task = await self.resolve(reference)
        updated = await self.repository.set_completed(task.id, completed)
        if updated is None:
            raise NotFoundError(f"Task not found: {reference}")
        return updated

    async def delete_task(self, reference: str) -> Task:
        """Move a task to the trash; its tracked time is kept."""
        task = await self.resolve(reference)
        await self._ensure_not_timing(task)
        await self.repository.soft_delete(task.id)
        logger.info("Task moved to trash: %s", task.id)
        return task

    async def restore_task(self, reference: str) -> Task:
        """Take a task out of the trash, together with its project if needed."""
        task = await self.resolve(reference, include_deleted=True)
        if not task.is_deleted:
            raise InvalidArgumentError(f"Task is not in the trash: {task.name}")

        project = await self.project_repository.get(task.project_id)
        if project is not None and project.is_deleted:
            # restoring the project brings all of its tasks back
            await self.project_repository.restore(project.id)
        else:
            await self.repository.restore(task.id)

        restored = await self.repository.get(task.id)
        assert restored is not None
        return restored

    async def purge_task(self, reference: str) -> Task:
        """Permanently delete a task and all of its sessions."""
        task = await self.resolve(reference, include_deleted=True)
        await self._ensure_not_timing(task)
        await self.repository.purge(task.id)
        logger.info("Task purged: %s", task.id)
        return task

    async def empty_trash(self) -> int:
        open_session = await self.session_repository.find_open_session()
        if open_session is not None:
            trashed_ids = {task.id for task in await self.repository.list_deleted()}
            if open_session.task_id in trashed_ids:
                raise ConflictError("A timer is running for a task in the trash; stop it first")
        count = await self.repository.purge_deleted()
        logger.info("Trash emptied: %d tasks", count)
        return count

    async def _ensure_not_timing(self, task: Task) -> None:
        open_session = await self.session_repository.find_open_session()
        if open_session is not None and open_session.task_id == task.id:
            raise ConflictError(f"Timer is running for '{task.name}'; stop it first")
