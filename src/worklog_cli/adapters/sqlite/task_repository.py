"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from contextlib import AbstractContextManager
from typing import Any

from worklog_cli.adapters.sqlite.connection import get_connection, transaction
from worklog_cli.adapters.sqlite.utils import (
    generate_uuid,
    now_utc,
    parse_datetime,
    row_to_dict,
    to_db_time,
)
from worklog_cli.models import Task, TaskCreate
from worklog_cli.repositories import TaskRepository


def _row_to_task(row: sqlite3.Row) -> Task:
    data = row_to_dict(row)
    data["completed"] = bool(data["completed"])
    data["is_restored"] = bool(data["is_restored"])
    data["created_at"] = parse_datetime(data["created_at"])
    data["deleted_at"] = parse_datetime(data["deleted_at"])
    return Task(**data)


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

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

    async def get(self, task_id: str) -> Task | None:
        cursor = self.connection.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
        row = cursor.fetchone()
        return _row_to_task(row) if row else None

    async def list_all(
        self, project_id: str | None = None, include_completed: bool = True
    ) -> list[Task]:
        query = "SELECT * FROM tasks WHERE deleted_at IS NULL"
        params: list[Any] = []

        if project_id:
            query += " AND project_id = ?"
            params.append(project_id)

        if not include_completed:
            query += " AND completed = 0"

        query += " ORDER BY completed ASC, created_at ASC"
        cursor = self.connection.execute(query, params)
        return [_row_to_task(row) for row in cursor.fetchall()]

    async def list_deleted(self) -> list[Task]:
        cursor = self.connection.execute(
            "SELECT * FROM tasks WHERE deleted_at IS NOT NULL ORDER BY deleted_at DESC"
        )
        return [_row_to_task(row) for row in cursor.fetchall()]

    async def add(self, task_data: TaskCreate) -> Task:
        task_id = generate_uuid()
        with self.transaction():
            self.connection.execute(
                "INSERT INTO tasks "
                "(id, project_id, name, completed, is_restored, created_at, deleted_at) "
                "VALUES (?, ?, ?, 0, ?, ?, NULL)",
                (
                    task_id,
                    task_data.project_id,
                    task_data.name,
                    1 if task_data.is_restored else 0,
                    to_db_time(now_utc()),
                ),
            )
        task = await self.get(task_id)
        assert task is not None
        return task

    async def rename(self, task_id: str, name: str) -> Task | None:
        with self.transaction():
            cursor = self.connection.execute(
                "UPDATE tasks SET name = ? WHERE id = ?", (name, task_id)
            )
        if cursor.rowcount == 0:
            return None
        return await self.get(task_id)

    async def set_completed(self, task_id: str, completed: bool) -> Task | None:
        with self.transaction():
            cursor = self.connection.execute(
                "UPDATE tasks SET completed = ? WHERE id = ?",
                (1 if completed else 0, task_id),
            )
        if cursor.rowcount == 0:
            return None
        return await self.get(task_id)

    async def soft_delete(self, task_id: str) -> bool:
        with self.transaction():
            cursor = self.connection.execute(
                "UPDATE tasks SET deleted_at = ? WHERE id = ? AND deleted_at IS NULL",
                (to_db_time(now_utc()), task_id),
            )
        return cursor.rowcount > 0

    async def restore(self, task_id: str) -> bool:
        with self.transaction():
            cursor = self.connection.execute(
                "UPDATE tasks SET deleted_at = NULL WHERE id = ? AND deleted_at IS NOT NULL",
                (task_id,),
            )
        return cursor.rowcount > 0

    async def purge(self, task_id: str) -> bool:
        # time_sessions rows go with the task via ON DELETE CASCADE
        with self.transaction():
            cursor = self.connection.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        return cursor.rowcount > 0

    async def purge_deleted(self) -> int:
        with self.transaction():
            cursor = self.connection.execute(
                "DELETE FROM tasks WHERE deleted_at IS NOT NULL"
            )
        return cursor.rowcount

    async def import_task(self, task: Task) -> None:
        with self.transaction():
            self.connection.execute(
                "INSERT INTO tasks "
                "(id, project_id, name, completed, is_restored, created_at, deleted_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET project_id = excluded.project_id, "
                "name = excluded.name, completed = excluded.completed, "
                "is_restored = excluded.is_restored, created_at = excluded.created_at, "
                "deleted_at = excluded.deleted_at",
                (
                    task.id,
                    task.project_id,
                    task.name,
                    1 if task.completed else 0,
                    1 if task.is_restored else 0,
                    to_db_time(task.created_at),
                    to_db_time(task.deleted_at),
                ),
            )
