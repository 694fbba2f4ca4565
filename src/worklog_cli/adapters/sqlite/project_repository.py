"""SQLite implementation of ProjectRepository."""

from __future__ import annotations

import sqlite3
from contextlib import AbstractContextManager

from worklog_cli.adapters.sqlite.connection import get_connection, transaction
from worklog_cli.adapters.sqlite.utils import (
    build_update_clause,
    generate_uuid,
    now_utc,
    parse_datetime,
    row_to_dict,
    to_db_time,
)
from worklog_cli.models import Project, ProjectCreate, ProjectUpdate
from worklog_cli.repositories import ProjectRepository


def _row_to_project(row: sqlite3.Row) -> Project:
    data = row_to_dict(row)
    data["created_at"] = parse_datetime(data["created_at"])
    data["deleted_at"] = parse_datetime(data["deleted_at"])
    return Project(**data)


class SqliteProjectRepository(ProjectRepository):
    """SQLite implementation of project repository.

    Deleting a project moves its live tasks to the trash in the same
    transaction; restoring it brings all of its tasks back.
    """

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def transaction(self) -> AbstractContextManager[sqlite3.Connection]:
        return transaction(self.connection)

    async def get(self, project_id: str) -> Project | None:
        cursor = self.connection.execute(
            "SELECT * FROM projects WHERE id = ?", (project_id,)
        )
        row = cursor.fetchone()
        return _row_to_project(row) if row else None

    async def list_all(self) -> list[Project]:
        cursor = self.connection.execute(
            "SELECT * FROM projects WHERE deleted_at IS NULL ORDER BY created_at ASC"
        )
        return [_row_to_project(row) for row in cursor.fetchall()]

    async def list_deleted(self) -> list[Project]:
        cursor = self.connection.execute(
            "SELECT * FROM projects WHERE deleted_at IS NOT NULL ORDER BY deleted_at DESC"
        )
        return [_row_to_project(row) for row in cursor.fetchall()]

    async def add(self, project_data: ProjectCreate) -> Project:
        project_id = generate_uuid()
        with self.transaction():
            self.connection.execute(
                "INSERT INTO projects (id, name, hourly_rate, color, created_at, deleted_at) "
                "VALUES (?, ?, ?, ?, ?, NULL)",
                (
                    project_id,
                    project_data.name,
                    project_data.hourly_rate,
                    project_data.color,
                    to_db_time(now_utc()),
                ),
            )
        project = await self.get(project_id)
        assert project is not None
        return project

    async def update(self, project_id: str, updates: ProjectUpdate) -> Project | None:
        set_clause, params = build_update_clause(updates.model_dump())
        if not set_clause:
            return await self.get(project_id)

        with self.transaction():
            cursor = self.connection.execute(
                f"UPDATE projects SET {set_clause} WHERE id = ?",
                [*params, project_id],
            )
        if cursor.rowcount == 0:
            return None
        return await self.get(project_id)

    async def soft_delete(self, project_id: str) -> bool:
        now = to_db_time(now_utc())
        with self.transaction():
            cursor = self.connection.execute(
                "UPDATE projects SET deleted_at = ? WHERE id = ? AND deleted_at IS NULL",
                (now, project_id),
            )
            if cursor.rowcount == 0:
                return False
            self.connection.execute(
                "UPDATE tasks SET deleted_at = ? WHERE project_id = ? AND deleted_at IS NULL",
                (now, project_id),
            )
        return True

    async def restore(self, project_id: str) -> bool:
        with self.transaction():
            cursor = self.connection.execute(
                "UPDATE projects SET deleted_at = NULL WHERE id = ? AND deleted_at IS NOT NULL",
                (project_id,),
            )
            if cursor.rowcount == 0:
                return False
            self.connection.execute(
                "UPDATE tasks SET deleted_at = NULL WHERE project_id = ?", (project_id,)
            )
        return True

    async def purge(self, project_id: str) -> bool:
        # tasks and their sessions follow via ON DELETE CASCADE
        with self.transaction():
            cursor = self.connection.execute(
                "DELETE FROM projects WHERE id = ?", (project_id,)
            )
        return cursor.rowcount > 0

    async def import_project(self, project: Project) -> None:
        with self.transaction():
            self.connection.execute(
                "INSERT INTO projects (id, name, hourly_rate, color, created_at, deleted_at) "
                "VALUES (?, ?, ?, ?, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET name = excluded.name, "
                "hourly_rate = excluded.hourly_rate, color = excluded.color, "
                "created_at = excluded.created_at, deleted_at = excluded.deleted_at",
                (
                    project.id,
                    project.name,
                    project.hourly_rate,
                    project.color,
                    to_db_time(project.created_at),
                    to_db_time(project.deleted_at),
                ),
            )
