"""Manual time entry commands."""

import typer

from worklog_cli.services.app_context import get_app_context
from worklog_cli.utils.errors import InvalidArgumentError
from worklog_cli.utils.time_format import format_duration, parse_duration
from worklog_cli.utils.typer_helpers import SuggestingGroup
from worklog_cli.utils.ui.formatters import (
    format_info,
    format_output,
    format_success,
    render_sessions,
)

from .decorators import command_wrapper
from .utils import output_option, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Manual time entries")


@app.command("add")
@command_wrapper
async def add_entry(
    task: str = typer.Argument(..., help="Task id, id prefix or name"),
    duration: str = typer.Argument(..., help="Duration: 1h30m, 45m, 1:30 or minutes"),
) -> None:
    """Record time already spent on a task, ending now."""
    try:
        seconds = parse_duration(duration)
    except ValueError as e:
        raise InvalidArgumentError(str(e)) from e

    ctx = get_app_context()
    target = await ctx.tasks.resolve(task)
    session = await ctx.sessions.add_manual(target.id, seconds)
    format_success(
        f"Logged {format_duration(session.duration_seconds)} on {target.name} (#{session.id[:8]})"
    )


@app.command("list")
@command_wrapper
async def list_entries(
    task: str | None = typer.Option(None, "--task", "-t", help="Only this task"),
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Number of entries"),
    output: str | None = output_option(),
) -> None:
    """List recent time entries."""
    ctx = get_app_context()
    task_id = (await ctx.tasks.resolve(task, include_deleted=True)).id if task else None
    sessions = await ctx.sessions.list_sessions(task_id=task_id, limit=limit)

    names: dict[str, str] = {}
    rows = []
    for session in sessions:
        if session.task_id not in names:
            owner = await ctx.task_repository.get(session.task_id)
            names[session.task_id] = owner.name if owner else session.task_id
        row = session.model_dump()
        row["task_name"] = names[session.task_id]
        rows.append(row)

    format_output(rows, resolve_output(ctx, output), pretty=render_sessions)


@app.command("delete")
@command_wrapper
async def delete_entry(
    session: str = typer.Argument(..., help="Entry id or id prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a time entry."""
    if not yes and not typer.confirm(f"Delete time entry {session}?"):
        format_info("Cancelled")
        raise typer.Exit(0)

    ctx = get_app_context()
    deleted = await ctx.sessions.delete_session(session)
    format_success(f"Deleted entry #{deleted.id[:8]} ({format_duration(deleted.duration_seconds)})")
