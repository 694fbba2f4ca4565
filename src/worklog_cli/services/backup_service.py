"""Backup service - JSON export and import of all tracked data.

Document layout::

    {
      "version": 1,
      "exported_at": "2024-01-15T10:00:00+00:00",
      "projects": [...],
      "tasks": [...],
      "sessions": [...]
    }

Import merges by id unless ``replace`` is set, in which case everything
already stored is purged first. Either way the import is all or nothing.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from worklog_cli.models import Project, Task, TimeSession
from worklog_cli.repositories import ProjectRepository, SessionRepository, TaskRepository
from worklog_cli.utils.errors import ConflictError, InvalidArgumentError
from worklog_cli.utils.logger import get_component_logger
from worklog_cli.utils.time_format import utc_now

logger = get_component_logger("backup")

BACKUP_VERSION = 1


class BackupDocument(BaseModel):
    version: int = BACKUP_VERSION
    exported_at: datetime = Field(default_factory=utc_now)
    projects: list[Project] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    sessions: list[TimeSession] = Field(default_factory=list)


class ImportSummary(BaseModel):
    projects: int
    tasks: int
    sessions: int


class BackupService:
    """Reads and writes ``BackupDocument`` files."""

    def __init__(
        self,
        project_repository: ProjectRepository,
        task_repository: TaskRepository,
        session_repository: SessionRepository,
    ):
        self.project_repository = project_repository
        self.task_repository = task_repository
        self.session_repository = session_repository

    async def build_document(self) -> BackupDocument:
        projects = await self.project_repository.list_all()
        projects += await self.project_repository.list_deleted()
        tasks = await self.task_repository.list_all()
        tasks += await self.task_repository.list_deleted()
        sessions = await self.session_repository.list_all()
        return BackupDocument(projects=projects, tasks=tasks, sessions=sessions)

    async def export_to_file(self, path: Path) -> BackupDocument:
        document = await self.build_document()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
        logger.info(
            "Exported %d projects, %d tasks, %d sessions to %s",
            len(document.projects),
            len(document.tasks),
            len(document.sessions),
            path,
        )
        return document

    def read_file(self, path: Path) -> BackupDocument:
        """Parse and validate a backup file.

        Raises:
            InvalidArgumentError: If the file is missing, not JSON or malformed
        """
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            document = BackupDocument.model_validate(raw)
        except FileNotFoundError as e:
            raise InvalidArgumentError(f"Backup file not found: {path}") from e
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise InvalidArgumentError(f"Invalid backup file {path}: {e}") from e

        if document.version > BACKUP_VERSION:
            raise InvalidArgumentError(
                f"Backup version {document.version} is newer than supported ({BACKUP_VERSION})"
            )
        return document

    async def import_document(
        self, document: BackupDocument, replace: bool = False
    ) -> ImportSummary:
        """Write *document* into the store in one transaction.

        Nothing is written unless every record goes in, so a rejected
        ``replace`` import leaves the existing data untouched.

        Raises:
            ConflictError: If the import would leave two sessions open
            InvalidArgumentError: If a record references a missing project or task
        """
        await self._check_open_sessions(document, replace)

        try:
            with self.project_repository.transaction():
                if replace:
                    await self._purge_all()
                for project in document.projects:
                    await self.project_repository.import_project(project)
                for task in document.tasks:
                    await self.task_repository.import_task(task)
                for session in document.sessions:
                    await self.session_repository.import_session(session)
        except sqlite3.IntegrityError as e:
            logger.warning("Backup import rolled back: %s", e)
            raise InvalidArgumentError(f"Backup references missing records: {e}") from e

        logger.info(
            "Imported %d projects, %d tasks, %d sessions (replace=%s)",
            len(document.projects),
            len(document.tasks),
            len(document.sessions),
            replace,
        )
        return ImportSummary(
            projects=len(document.projects),
            tasks=len(document.tasks),
            sessions=len(document.sessions),
        )

    async def _check_open_sessions(self, document: BackupDocument, replace: bool) -> None:
        incoming_open = [s for s in document.sessions if s.is_open]
        if len(incoming_open) > 1:
            raise InvalidArgumentError("Backup contains more than one running session")

        current = await self.session_repository.find_open_session()
        if current is None:
            return
        if replace:
            raise ConflictError("A timer is running; stop it before replacing all data")
        if incoming_open and incoming_open[0].id != current.id:
            raise ConflictError("Backup has a running session and a timer is already running")

    async def _purge_all(self) -> None:
        # tasks and sessions follow their project via ON DELETE CASCADE
        projects = await self.project_repository.list_all()
        projects += await self.project_repository.list_deleted()
        for project in projects:
            await self.project_repository.purge(project.id)
