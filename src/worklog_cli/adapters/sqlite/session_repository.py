"""SQLite implementation of SessionRepository."""

from __future__ import annotations

import sqlite3
from contextlib import AbstractContextManager
from datetime import datetime, timedelta

from worklog_cli.adapters.sqlite.connection import get_connection, transaction
from worklog_cli.adapters.sqlite.utils import (
    generate_uuid,
    now_utc,
    parse_datetime,
    row_to_dict,
    to_db_time,
)
from worklog_cli.models import TimeSession
from worklog_cli.repositories import SessionRepository


def _row_to_session(row: sqlite3.Row) -> TimeSession:
    data = row_to_dict(row)
    data["start_time"] = parse_datetime(data["start_time"])
    data["end_time"] = parse_datetime(data["end_time"])
    data["duration_seconds"] = data["duration_seconds"] or 0
    return TimeSession(**data)


class SqliteSessionRepository(SessionRepository):
    """SQLite implementation of the time session store."""

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite session repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Already-configured connection to use instead of *db_path*.
        """
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

    async def find_open_session(self) -> TimeSession | None:
        cursor = self.connection.execute(
            "SELECT * FROM time_sessions WHERE end_time IS NULL "
            "ORDER BY start_time DESC LIMIT 1"
        )
        row = cursor.fetchone()
        return _row_to_session(row) if row else None

    async def insert_open_session(
        self, task_id: str, start_time: datetime | None = None
    ) -> str:
        session_id = generate_uuid()
        with self.transaction():
            self.connection.execute(
                "INSERT INTO time_sessions (id, task_id, start_time, end_time, duration_seconds) "
                "VALUES (?, ?, ?, NULL, 0)",
                (session_id, task_id, to_db_time(start_time or now_utc())),
            )
        return session_id

    async def close_session(
        self, session_id: str, end_time: datetime, duration_seconds: int
    ) -> bool:
        with self.transaction():
            cursor = self.connection.execute(
                "UPDATE time_sessions SET end_time = ?, duration_seconds = ? "
                "WHERE id = ? AND end_time IS NULL",
                (to_db_time(end_time), duration_seconds, session_id),
            )
        return cursor.rowcount > 0

    async def get(self, session_id: str) -> TimeSession | None:
        cursor = self.connection.execute(
            "SELECT * FROM time_sessions WHERE id = ?", (session_id,)
        )
        row = cursor.fetchone()
        return _row_to_session(row) if row else None

    async def list_by_task(self, task_id: str) -> list[TimeSession]:
        cursor = self.connection.execute(
            "SELECT * FROM time_sessions WHERE task_id = ? ORDER BY start_time DESC",
            (task_id,),
        )
        return [_row_to_session(row) for row in cursor.fetchall()]

    async def list_recent(self, limit: int = 20) -> list[TimeSession]:
        cursor = self.connection.execute(
            "SELECT * FROM time_sessions ORDER BY start_time DESC LIMIT ?", (limit,)
        )
        return [_row_to_session(row) for row in cursor.fetchall()]

    async def list_all(self) -> list[TimeSession]:
        cursor = self.connection.execute(
            "SELECT * FROM time_sessions ORDER BY start_time ASC"
        )
        return [_row_to_session(row) for row in cursor.fetchall()]

    async def add_manual_session(
        self, task_id: str, seconds: int, now: datetime | None = None
    ) -> str | None:
        if not seconds or seconds <= 0:
            return None

        end_time = now or now_utc()
        start_time = end_time - timedelta(seconds=seconds)
        session_id = generate_uuid()
        with self.transaction():
            self.connection.execute(
                "INSERT INTO time_sessions (id, task_id, start_time, end_time, duration_seconds) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    session_id,
                    task_id,
                    to_db_time(start_time),
                    to_db_time(end_time),
                    int(seconds),
                ),
            )
        return session_id

    async def delete(self, session_id: str) -> bool:
        with self.transaction():
            cursor = self.connection.execute(
                "DELETE FROM time_sessions WHERE id = ? AND end_time IS NOT NULL",
                (session_id,),
            )
        return cursor.rowcount > 0

    async def total_seconds_by_task(self, task_id: str) -> int:
        row = self.connection.execute(
            "SELECT COALESCE(SUM(duration_seconds), 0) FROM time_sessions "
            "WHERE task_id = ? AND end_time IS NOT NULL",
            (task_id,),
        ).fetchone()
        return int(row[0])

    async def total_seconds_by_tasks(self, task_ids: list[str]) -> int:
        if not task_ids:
            return 0
        placeholders = ", ".join("?" for _ in task_ids)
        row = self.connection.execute(
            "SELECT COALESCE(SUM(duration_seconds), 0) FROM time_sessions "
            f"WHERE task_id IN ({placeholders}) AND end_time IS NOT NULL",
            list(task_ids),
        ).fetchone()
        return int(row[0])

    async def import_session(self, session: TimeSession) -> None:
        with self.transaction():
            self.connection.execute(
                "INSERT INTO time_sessions "
                "(id, task_id, start_time, end_time, duration_seconds) VALUES (?, ?, ?, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET task_id = excluded.task_id, "
                "start_time = excluded.start_time, end_time = excluded.end_time, "
                "duration_seconds = excluded.duration_seconds",
                (
                    session.id,
                    session.task_id,
                    to_db_time(session.start_time),
                    to_db_time(session.end_time),
                    session.duration_seconds,
                ),
            )
