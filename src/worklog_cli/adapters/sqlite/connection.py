"""Database connection management for the local SQLite store.

One connection per database path and process, configured with foreign keys
and WAL, and migrated to the latest schema on first use.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from platformdirs import user_data_dir

from worklog_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from worklog_cli.utils.logger import get_component_logger

logger = get_component_logger("db")

DEFAULT_DB_NAME = "worklog.db"


def default_db_path() -> Path:
    return Path(user_data_dir("worklog_cli")) / DEFAULT_DB_NAME


def configure_connection(connection: sqlite3.Connection) -> sqlite3.Connection:
    """Apply row factory, pragmas and migrations to a fresh connection."""
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    connection.execute("PRAGMA journal_mode = WAL")
    MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    return connection


class DatabaseConnection:
    """Per-process registry of open connections, keyed by database path."""

    _connections: dict[Path, sqlite3.Connection] = {}
    _atexit_registered = False

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create the connection for *db_path*.

        Args:
            db_path: Path to database file. If None, uses the default location.
        """
        path = Path(db_path) if db_path is not None else default_db_path()

        existing = cls._connections.get(path)
        if existing is not None:
            return existing

        path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not path.exists()

        connection = sqlite3.connect(str(path), timeout=30.0)
        if is_new_database:
            os.chmod(path, 0o600)
        configure_connection(connection)
        logger.debug("Opened database %s", path)

        cls._connections[path] = connection
        if not cls._atexit_registered:
            atexit.register(cls.close_all)
            cls._atexit_registered = True

        return connection

    @classmethod
    def close_all(cls) -> None:
        """Commit and close every open connection."""
        for path, connection in list(cls._connections.items()):
            try:
                connection.commit()
                connection.close()
            except sqlite3.Error as e:
                logger.warning("Error closing database %s: %s", path, e)
        cls._connections.clear()


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get a database connection."""
    return DatabaseConnection.get_connection(db_path)


@contextmanager
def transaction(connection: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Commit on success and roll back on error.

    A block opened while a transaction is already active joins it, so the
    outermost block decides whether everything inside is kept.
    """
    if connection.in_transaction:
        yield connection
        return

    connection.execute("BEGIN")
    try:
        yield connection
    except BaseException:
        connection.rollback()
        raise
    connection.commit()


def connect_in_memory() -> sqlite3.Connection:
    """A migrated in-memory database, mostly for tests."""
    return configure_connection(sqlite3.connect(":memory:"))
