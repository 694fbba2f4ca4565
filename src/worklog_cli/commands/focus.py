"""Focus mode commands with a live Pomodoro timer.

The focus cycle lives only as long as ``focus run``; quitting keeps any task
timer that was started with it running in the database.
"""

import typer
from pydantic import ValidationError

from worklog_cli.models.focus import MODE_LABELS, PHASE_MODES
from worklog_cli.services.app_context import get_app_context
from worklog_cli.utils.errors import AppError, ConflictError, InvalidArgumentError
from worklog_cli.utils.time_format import format_duration
from worklog_cli.utils.typer_helpers import SuggestingGroup
from worklog_cli.utils.ui.console import get_console
from worklog_cli.utils.ui.formatters import (
    format_info,
    format_output,
    format_success,
    format_warning,
)
from worklog_cli.utils.ui.timer_display import FocusDisplay

from .decorators import command_wrapper
from .utils import output_option, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Focus mode with Pomodoro timer")
console = get_console()


@app.command("run")
@command_wrapper
async def run_focus(
    task: str | None = typer.Option(
        None, "--task", "-t", help="Also start the task timer (linked start)"
    ),
    mode: str = typer.Option("work", "--mode", "-m", help="work, short_break or long_break"),
) -> None:
    """Run the focus cycle in the terminal."""
    if mode not in PHASE_MODES:
        raise InvalidArgumentError(f"Unknown mode '{mode}'. Use one of: {', '.join(PHASE_MODES)}")

    ctx = get_app_context()
    await ctx.timer.recover()

    display = FocusDisplay(console, bell=ctx.config.notifications.bell)
    ctx.coordinator.notifier = display.notify

    if task is not None:
        if mode != "work":
            raise InvalidArgumentError("A linked start always begins with a work phase")
        target = await ctx.tasks.resolve(task)
        if ctx.timer.is_running:
            raise ConflictError("A task timer is already running; stop it before a linked start")
        if not await ctx.coordinator.start_linked(target.id):
            raise AppError("Could not start the task timer, see the log for details")
        format_info(f"Tracking time on {target.name}")
    else:
        ctx.focus.start(mode)

    result = await display.run(ctx.coordinator, ctx.timer.snapshot)

    completed = ctx.focus.completed_work_sessions
    if result == "stopped":
        format_info("Focus cycle stopped")
    format_info(f"Work sessions completed: {completed}")
    if ctx.timer.is_running:
        snapshot = ctx.timer.snapshot()
        name = snapshot.active_task.name if snapshot.active_task else snapshot.active_task_id
        format_warning(
            f"Timer still running for {name} ({format_duration(snapshot.elapsed_seconds)}); "
            "use 'worklog timer stop' to stop it"
        )


@app.command("settings")
@command_wrapper
def focus_settings(
    work: int | None = typer.Option(None, "--work", help="Work minutes"),
    short_break: int | None = typer.Option(None, "--short-break", help="Short break minutes"),
    long_break: int | None = typer.Option(None, "--long-break", help="Long break minutes"),
    sessions: int | None = typer.Option(
        None, "--sessions", help="Work sessions until a long break"
    ),
    output: str | None = output_option(),
) -> None:
    """Show or change focus durations."""
    ctx = get_app_context()
    changes = {
        "work_minutes": work,
        "short_break_minutes": short_break,
        "long_break_minutes": long_break,
        "sessions_until_long_break": sessions,
    }
    if any(value is not None for value in changes.values()):
        try:
            ctx.focus.update_settings(**changes)
        except ValidationError as e:
            error = e.errors()[0]
            raise InvalidArgumentError(f"{error['loc'][0]}: {error['msg']}") from e
        format_success("Focus settings saved")

    settings = ctx.focus.settings

    def pretty(_: dict) -> None:
        for phase in PHASE_MODES:
            minutes = settings.duration_seconds(phase) // 60
            console.print(f"[bold]{MODE_LABELS[phase]}:[/bold] {minutes} min")
        console.print(
            f"[bold]Long break after:[/bold] {settings.sessions_until_long_break} work sessions"
        )

    format_output(settings.model_dump(), resolve_output(ctx, output), pretty=pretty)
