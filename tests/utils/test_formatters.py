"""Tests for output formatters and the live timer panels."""

from __future__ import annotations

import io
import json
from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

import pytest
import typer
import yaml
from rich.console import Console

from worklog_cli.models import Task
from worklog_cli.models.focus import CycleCompletion
from worklog_cli.services.focus_coordinator import FocusCoordinator
from worklog_cli.services.focus_engine import FocusCycleEngine
from worklog_cli.services.timer_engine import TimerSnapshot
from worklog_cli.utils.typer_helpers import validate_output_format
from worklog_cli.utils.ui import formatters
from worklog_cli.utils.ui.formatters import format_output, render_report
from worklog_cli.utils.ui.timer_display import (
    FocusDisplay,
    TimerWatchDisplay,
    render_focus,
    render_timer,
)

START = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)


@pytest.fixture()
def recording_console(monkeypatch):
    console = Console(record=True, width=100, color_system=None)
    monkeypatch.setattr(formatters, "console", console)
    return console


def _render(renderable) -> str:
    console = Console(record=True, width=100, color_system=None)
    console.print(renderable)
    return console.export_text()


class TestFormatOutput:
    def test_json(self, capsys):
        format_output({"started": START, "name": "Кофе"}, "json")
        data = json.loads(capsys.readouterr().out)
        assert data == {"started": "2024-01-15 09:00:00+00:00", "name": "Кофе"}

    def test_yaml_keeps_order(self, capsys):
        format_output({"b": 1, "a": 2}, "yaml")
        out = capsys.readouterr().out
        assert out.index("b:") < out.index("a:")
        assert yaml.safe_load(out) == {"b": 1, "a": 2}

    def test_pretty_uses_renderer(self):
        seen = []
        format_output([1, 2], "pretty", pretty=seen.append)
        assert seen == [[1, 2]]

    def test_pretty_without_renderer_falls_back_to_table(self, recording_console):
        format_output([{"task_name": "Docs", "completed": True}], "pretty")
        text = recording_console.export_text()
        assert "Task Name" in text
        assert "✓" in text

    def test_empty_table(self, recording_console):
        format_output([], "table")
        assert "No data to display" in recording_console.export_text()


def test_validate_output_format():
    assert validate_output_format(None) is None
    assert validate_output_format("yaml") == "yaml"
    with pytest.raises(typer.BadParameter, match="must be one of"):
        validate_output_format("xml")


class TestRenderers:
    def test_tasks_show_running_and_total(self, recording_console):
        formatters.render_tasks(
            [
                {
                    "id": "abcdef123456",
                    "name": "Docs",
                    "completed": False,
                    "project_name": "Website",
                    "total_seconds": 90,
                    "is_running": True,
                }
            ]
        )
        text = recording_console.export_text()
        assert "#abcdef12" in text
        assert "00:01:30" in text
        assert "running" in text

    def test_sessions_mark_open_entry(self, recording_console):
        formatters.render_sessions(
            [
                {
                    "id": "s1",
                    "task_id": "t1",
                    "task_name": "Docs",
                    "start_time": START,
                    "end_time": None,
                    "duration_seconds": 0,
                }
            ]
        )
        assert "running" in recording_console.export_text()

    def test_report_totals_with_money(self, recording_console):
        render_report(
            [
                {
                    "project_id": "p1",
                    "project_name": "Website",
                    "hourly_rate": 2000,
                    "seconds": 27000,
                    "cost": 15000,
                    "tasks": [
                        {
                            "task_id": "t1",
                            "task_name": "Docs",
                            "completed": False,
                            "seconds": 27000,
                            "cost": 15000,
                        }
                    ],
                }
            ]
        )
        text = recording_console.export_text()
        assert "07:30:00" in text
        assert "15 000 ₽" in text

    def test_empty_report(self, recording_console):
        render_report([])
        assert "Nothing tracked yet" in recording_console.export_text()


class TestPanels:
    def test_idle_timer(self):
        snapshot = TimerSnapshot(False, None, None, None, None, 0)
        assert "No timer running" in _render(render_timer(snapshot))

    def test_running_timer(self):
        task = Task(id="t1", project_id="p1", name="Docs", created_at=START)
        snapshot = TimerSnapshot(True, "s1", "t1", task, START, 3661)

        text = _render(render_timer(snapshot))

        assert "Docs" in text
        assert "01:01:01" in text

    def test_focus_panel_with_pending_completion(self, settings_store, scheduler):
        focus = FocusCycleEngine(settings_store, scheduler)
        focus.start("work", linked=True)
        completion = focus.skip()

        task = Task(id="t1", project_id="p1", name="Docs", created_at=START)
        snapshot = TimerSnapshot(True, "s1", "t1", task, START, 60)
        text = _render(render_focus(focus, snapshot, completion))

        assert "Work" in text
        assert "Tracking Docs (linked)" in text
        assert "Work finished" in text
        assert "short break" in text
        assert "sessions done" not in text

    def test_completion_message_for_long_break(self, settings_store, scheduler):
        focus = FocusCycleEngine(settings_store, scheduler)
        text = _render(render_focus(focus, None, CycleCompletion("work", "long_break", 4)))
        assert "long break" in text
        assert "4 work sessions done" in text


def _keys(*keys):
    """Patch the keyboard to return *keys* one per refresh, then nothing."""
    keyboard = MagicMock()
    keyboard.get_key.side_effect = [*keys] + [None] * 100
    return patch("worklog_cli.utils.ui.timer_display.KeyboardHandler", return_value=keyboard)


@pytest.fixture()
def quiet_console():
    return Console(file=io.StringIO(), width=100, color_system=None)


@pytest.mark.asyncio
class TestLiveViews:
    async def test_watch_stop_key(self, quiet_console, timer, task):
        await timer.start(task.id)

        with _keys("s"), patch("worklog_cli.utils.ui.timer_display.REFRESH_SECONDS", 0):
            result = await TimerWatchDisplay(quiet_console).run(timer.snapshot, timer.stop)

        assert result == "stopped"
        assert not timer.is_running

    async def test_watch_quit_keeps_timer(self, quiet_console, timer, task):
        await timer.start(task.id)

        with _keys(None, "q"), patch("worklog_cli.utils.ui.timer_display.REFRESH_SECONDS", 0):
            result = await TimerWatchDisplay(quiet_console).run(timer.snapshot, timer.stop)

        assert result == "quit"
        assert timer.is_running

    async def test_focus_keys(self, quiet_console, timer, task, settings_store, scheduler):
        focus = FocusCycleEngine(settings_store, scheduler)
        display = FocusDisplay(quiet_console, bell=False)
        coordinator = FocusCoordinator(timer, focus, notifier=display.notify)
        await coordinator.start_linked(task.id)

        # pause, skip (completes work), continue into the break, stop the task timer, quit
        with _keys("p", "n", "c", "t", "q"), patch(
            "worklog_cli.utils.ui.timer_display.REFRESH_SECONDS", 0
        ):
            result = await display.run(coordinator, timer.snapshot)

        assert result == "quit"
        assert focus.mode == "short_break"
        assert focus.is_running
        assert focus.completed_work_sessions == 1
        assert display.pending is None
        assert not timer.is_running

    async def test_focus_stop_key(self, quiet_console, timer, settings_store, scheduler):
        focus = FocusCycleEngine(settings_store, scheduler)
        coordinator = FocusCoordinator(timer, focus)
        focus.start("work")

        with _keys("s"), patch("worklog_cli.utils.ui.timer_display.REFRESH_SECONDS", 0):
            result = await FocusDisplay(quiet_console).run(coordinator, timer.snapshot)

        assert result == "stopped"
        assert focus.mode == "idle"

    async def test_second_skip_does_not_count_again(
        self, quiet_console, timer, settings_store, scheduler
    ):
        focus = FocusCycleEngine(settings_store, scheduler)
        display = FocusDisplay(quiet_console, bell=False)
        coordinator = FocusCoordinator(timer, focus, notifier=display.notify)
        focus.start("work")

        with _keys("n", "n", "q"), patch(
            "worklog_cli.utils.ui.timer_display.REFRESH_SECONDS", 0
        ):
            await display.run(coordinator, timer.snapshot)

        assert focus.completed_work_sessions == 1
        assert display.pending.next_mode == "short_break"
