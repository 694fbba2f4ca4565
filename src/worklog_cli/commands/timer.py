"""Task timer commands.

Each invocation recovers the running timer from the database first, so
``start`` in one shell and ``stop`` in another work on the same session.
"""

import typer

from worklog_cli.services.app_context import AppContext, get_app_context
from worklog_cli.utils.errors import AppError, ConflictError
from worklog_cli.utils.time_format import format_clock, format_duration
from worklog_cli.utils.typer_helpers import SuggestingGroup
from worklog_cli.utils.ui.console import get_console
from worklog_cli.utils.ui.formatters import format_info, format_output, format_success
from worklog_cli.utils.ui.timer_display import TimerWatchDisplay, render_timer

from .decorators import command_wrapper
from .utils import output_option, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Start and stop the task timer")
console = get_console()


def _running_task_name(ctx: AppContext) -> str:
    snapshot = ctx.timer.snapshot()
    if snapshot.active_task is not None:
        return snapshot.active_task.name
    return snapshot.active_task_id or "unknown task"


@app.command("start")
@command_wrapper
async def start_timer(
    task: str = typer.Argument(..., help="Task id, id prefix or name"),
) -> None:
    """Start tracking time on a task."""
    ctx = get_app_context()
    await ctx.timer.recover()
    target = await ctx.tasks.resolve(task)

    if ctx.timer.is_running:
        raise ConflictError(
            f"Timer already running for '{_running_task_name(ctx)}'; stop it first"
        )
    if not await ctx.timer.start(target.id):
        raise AppError("Could not start the timer, see the log for details")

    format_success(f"Timer started: {target.name} at {format_clock(ctx.timer.start_time)}")


@app.command("stop")
@command_wrapper
async def stop_timer() -> None:
    """Stop the running timer and save the time entry."""
    ctx = get_app_context()
    await ctx.timer.recover()
    if not ctx.timer.is_running:
        raise ConflictError("No timer is running")

    session_id = ctx.timer.active_session_id
    task_name = _running_task_name(ctx)
    if not await ctx.timer.stop():
        raise AppError("Could not stop the timer, see the log for details")

    session = await ctx.session_repository.get(session_id)
    duration = session.duration_seconds if session else 0
    format_success(f"Timer stopped: {task_name}, {format_duration(duration)}")


@app.command("status")
@command_wrapper
async def timer_status(
    output: str | None = output_option(),
) -> None:
    """Show the running timer."""
    ctx = get_app_context()
    await ctx.timer.recover()
    snapshot = ctx.timer.snapshot()

    data = {
        "is_running": snapshot.is_running,
        "session_id": snapshot.active_session_id,
        "task_id": snapshot.active_task_id,
        "task_name": snapshot.active_task.name if snapshot.active_task else None,
        "start_time": snapshot.start_time,
        "elapsed_seconds": snapshot.elapsed_seconds,
        "elapsed": format_duration(snapshot.elapsed_seconds),
    }
    format_output(
        data, resolve_output(ctx, output), pretty=lambda _: console.print(render_timer(snapshot))
    )


@app.command("watch")
@command_wrapper
async def watch_timer() -> None:
    """Show the running timer live ('s' stops it, 'q' quits)."""
    ctx = get_app_context()
    if not await ctx.timer.recover():
        format_info("No timer is running")
        return

    result = await TimerWatchDisplay(console).run(ctx.timer.snapshot, ctx.timer.stop)
    if result == "stopped":
        format_success("Timer stopped")
