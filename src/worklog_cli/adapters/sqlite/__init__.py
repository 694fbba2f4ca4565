"""SQLite adapter module - local database storage implementation."""

from worklog_cli.adapters.sqlite.connection import (
    DatabaseConnection,
    connect_in_memory,
    get_connection,
)
from worklog_cli.adapters.sqlite.project_repository import SqliteProjectRepository
from worklog_cli.adapters.sqlite.session_repository import SqliteSessionRepository
from worklog_cli.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "DatabaseConnection",
    "SqliteProjectRepository",
    "SqliteSessionRepository",
    "SqliteTaskRepository",
    "connect_in_memory",
    "get_connection",
]
