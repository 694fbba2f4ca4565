"""Unit tests for MigrationRunner and the initial schema."""

from __future__ import annotations

import sqlite3

import pytest

from worklog_cli.adapters.sqlite.connection import configure_connection
from worklog_cli.adapters.sqlite.migrations import ALL_MIGRATIONS
from worklog_cli.adapters.sqlite.migrations.runner import Migration, MigrationRunner

# ---------------------------------------------------------------------------
# Concrete test migrations
# ---------------------------------------------------------------------------


class _CreateNotes(Migration):
    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Create notes"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT)")


class _AddTags(Migration):
    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Add tags column"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("ALTER TABLE notes ADD COLUMN tags TEXT")


class _Broken(Migration):
    @property
    def version(self) -> int:
        return 3

    @property
    def description(self) -> str:
        return "Intentionally fails"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE half_done (id INTEGER)")
        connection.execute("THIS IS NOT SQL")


@pytest.fixture()
def raw_connection():
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


class TestMigrationRunner:
    def test_fresh_database_is_version_zero(self, raw_connection):
        assert MigrationRunner(raw_connection).get_current_version() == 0

    def test_runs_pending_in_order(self, raw_connection):
        runner = MigrationRunner(raw_connection)

        applied = runner.run_migrations([_AddTags(), _CreateNotes()])

        assert applied == 2
        assert runner.get_current_version() == 2
        raw_connection.execute("INSERT INTO notes (body, tags) VALUES ('x', 'y')")

    def test_second_run_is_noop(self, raw_connection):
        runner = MigrationRunner(raw_connection)
        runner.run_migrations([_CreateNotes()])
        assert runner.run_migrations([_CreateNotes()]) == 0

    def test_old_version_rejected(self, raw_connection):
        runner = MigrationRunner(raw_connection)
        runner.run_migration(_CreateNotes())
        with pytest.raises(ValueError):
            runner.run_migration(_CreateNotes())

    def test_failure_is_wrapped_and_not_recorded(self, raw_connection):
        runner = MigrationRunner(raw_connection)
        runner.run_migrations([_CreateNotes(), _AddTags()])

        with pytest.raises(RuntimeError, match="Migration 3 failed"):
            runner.run_migration(_Broken())

        assert runner.get_current_version() == 2


class TestInitialSchema:
    def test_tables_exist(self, connection):
        names = {
            row[0]
            for row in connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
        assert {"projects", "tasks", "time_sessions", "schema_version"} <= names

    def test_configure_is_idempotent(self, connection):
        configure_connection(connection)
        assert MigrationRunner(connection).get_current_version() == len(ALL_MIGRATIONS)

    def test_foreign_keys_enforced(self, connection):
        with pytest.raises(sqlite3.IntegrityError):
            connection.execute(
                "INSERT INTO tasks (id, project_id, name, created_at) "
                "VALUES ('t1', 'missing', 'Orphan', '2024-01-01T00:00:00+00:00')"
            )
