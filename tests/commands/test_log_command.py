"""Tests for manual entries, the report and backup commands."""

from __future__ import annotations

import asyncio
import json

import pytest
from typer.testing import CliRunner

from worklog_cli.main import app
from worklog_cli.utils.exit_codes import ERROR_CONFLICT, ERROR_INVALID_ARGS

runner = CliRunner()


@pytest.fixture(autouse=True)
def use_app_context(cli_context):
    return cli_context


class TestLog:
    @pytest.mark.parametrize(
        ("duration", "expected"),
        [("1h30m", "01:30:00"), ("45", "00:45:00"), ("0:20", "00:20:00")],
    )
    def test_add_entry(self, seeded, duration, expected):
        result = runner.invoke(app, ["log", "add", "Landing page", duration])

        assert result.exit_code == 0, result.output
        assert f"Logged {expected}" in result.output

    def test_bad_duration(self, seeded):
        result = runner.invoke(app, ["log", "add", "Landing page", "soon"])
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_zero_duration(self, seeded):
        result = runner.invoke(app, ["log", "add", "Landing page", "0m"])
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_list_json_has_task_names(self, seeded):
        runner.invoke(app, ["log", "add", "Landing page", "30m"])

        result = runner.invoke(app, ["log", "list", "-o", "json"])

        [entry] = json.loads(result.output)
        assert entry["task_name"] == "Landing page"
        assert entry["duration_seconds"] == 1800

    def test_delete_entry(self, cli_context, seeded):
        _, task = seeded
        session_id = asyncio.run(cli_context.session_repository.add_manual_session(task.id, 60))

        result = runner.invoke(app, ["log", "delete", session_id[:8], "-y"])

        assert result.exit_code == 0, result.output
        assert asyncio.run(cli_context.session_repository.get(session_id)) is None

    def test_running_entry_cannot_be_deleted(self, cli_context, seeded):
        runner.invoke(app, ["timer", "start", "Landing page"])
        session_id = cli_context.timer.active_session_id

        result = runner.invoke(app, ["log", "delete", session_id, "-y"])

        assert result.exit_code == ERROR_CONFLICT


class TestReport:
    def test_report_json(self, seeded):
        runner.invoke(app, ["log", "add", "Landing page", "1h30m"])

        result = runner.invoke(app, ["report", "-o", "json"])

        [project] = json.loads(result.output)
        assert project["project_name"] == "Website"
        assert project["seconds"] == 5400
        assert project["cost"] == 3000

    def test_report_pretty_shows_money(self, seeded):
        runner.invoke(app, ["log", "add", "Landing page", "7h30m"])

        result = runner.invoke(app, ["report"])

        assert result.exit_code == 0, result.output
        assert "15 000 ₽" in result.output


class TestData:
    def test_export_and_import(self, cli_context, seeded, tmp_path):
        runner.invoke(app, ["log", "add", "Landing page", "10m"])
        path = tmp_path / "backup.json"

        result = runner.invoke(app, ["data", "export", str(path)])
        assert result.exit_code == 0, result.output
        assert json.loads(path.read_text(encoding="utf-8"))["version"] == 1

        result = runner.invoke(app, ["data", "import", str(path)])
        assert result.exit_code == 0, result.output
        assert "Imported 1 projects, 1 tasks and 1 time entries" in result.output

    def test_import_missing_file(self, tmp_path):
        result = runner.invoke(app, ["data", "import", str(tmp_path / "nope.json")])
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_replace_needs_confirmation(self, seeded, tmp_path):
        path = tmp_path / "backup.json"
        runner.invoke(app, ["data", "export", str(path)])

        result = runner.invoke(app, ["data", "import", str(path), "--replace"], input="n\n")

        assert "Cancelled" in result.output
