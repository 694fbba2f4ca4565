"""Project service - Business logic for project operations."""

from __future__ import annotations

from pydantic import ValidationError

from worklog_cli.models import Project, ProjectCreate, ProjectUpdate
from worklog_cli.repositories import ProjectRepository, SessionRepository, TaskRepository
from worklog_cli.services.resolve import resolve_reference
from worklog_cli.utils.errors import ConflictError, InvalidArgumentError, NotFoundError
from worklog_cli.utils.logger import get_component_logger

logger = get_component_logger("projects")


class ProjectService:
    """Service for project business logic.

    Projects are looked up by id, unique id prefix or exact name. Deleting a
    project sends it and its tasks to the trash; ``purge`` removes them for
    good together with their time sessions.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        task_repository: TaskRepository,
        session_repository: SessionRepository,
    ):
        self.repository = project_repository
        self.task_repository = task_repository
        self.session_repository = session_repository

    async def list_projects(self) -> list[Project]:
        return await self.repository.list_all()

    async def list_deleted(self) -> list[Project]:
        return await self.repository.list_deleted()

    async def resolve(self, reference: str, include_deleted: bool = False) -> Project:
        """Find one project by id, id prefix or name.

        Raises:
            NotFoundError: If nothing matches
            InvalidArgumentError: If the reference is ambiguous
        """
        candidates = await self.repository.list_all()
        if include_deleted:
            candidates += await self.repository.list_deleted()
        return resolve_reference(candidates, reference, kind="Project")

    async def create_project(
        self, name: str, *, hourly_rate: float = 0, color: str | None = None
    ) -> Project:
        """Create a new project.

        Args:
            name: Project name (required)
            hourly_rate: Price of one hour of tracked time
            color: Optional hex color code
        """
        try:
            data = ProjectCreate(name=name.strip(), hourly_rate=hourly_rate)
            if color:
                data.color = color
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid project: {e.errors()[0]['msg']}") from e

        project = await self.repository.add(data)
        logger.info("Project created: %s (%s)", project.name, project.id)
        return project

    async def update_project(
        self,
        reference: str,
        *,
        name: str | None = None,
        hourly_rate: float | None = None,
        color: str | None = None,
    ) -> Project:
        project = await self.resolve(reference)
        try:
            updates = ProjectUpdate(
                name=name.strip() if name is not None else None,
                hourly_rate=hourly_rate,
                color=color,
            )
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid project: {e.errors()[0]['msg']}") from e

        updated = await self.repository.update(project.id, updates)
        if updated is None:
            raise NotFoundError(f"Project not found: {reference}")
        return updated

    async def delete_project(self, reference: str) -> Project:
        """Move a project and its tasks to the trash."""
        project = await self.resolve(reference)
        await self._ensure_not_timing(project)
        await self.repository.soft_delete(project.id)
        logger.info("Project moved to trash: %s", project.id)
        return project

    async def restore_project(self, reference: str) -> Project:
        project = await self.resolve(reference, include_deleted=True)
        if not await self.repository.restore(project.id):
            raise InvalidArgumentError(f"Project is not in the trash: {project.name}")
        return project

    async def purge_project(self, reference: str) -> Project:
        """Permanently delete a project with its tasks and sessions."""
        project = await self.resolve(reference, include_deleted=True)
        await self._ensure_not_timing(project)
        await self.repository.purge(project.id)
        logger.info("Project purged: %s", project.id)
        return project

    async def _ensure_not_timing(self, project: Project) -> None:
        open_session = await self.session_repository.find_open_session()
        if open_session is None:
            return
        task = await self.task_repository.get(open_session.task_id)
        if task is not None and task.project_id == project.id:
            raise ConflictError(
                f"Timer is running for a task in '{project.name}'; stop it first"
            )
