"""Task management commands."""

import typer

from worklog_cli.models import Task
from worklog_cli.services.app_context import AppContext, get_app_context
from worklog_cli.utils.typer_helpers import SuggestingGroup
from worklog_cli.utils.ui.formatters import (
    format_info,
    format_output,
    format_success,
    render_tasks,
)

from .decorators import command_wrapper
from .utils import output_option, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


async def _task_rows(ctx: AppContext, tasks: list[Task]) -> list[dict]:
    """Tasks as dicts with project name, tracked total and running flag."""
    project_names: dict[str, str] = {}
    open_session = await ctx.session_repository.find_open_session()
    rows = []
    for task in tasks:
        if task.project_id not in project_names:
            project = await ctx.project_repository.get(task.project_id)
            project_names[task.project_id] = project.name if project else "-"
        row = task.model_dump()
        row["project_name"] = project_names[task.project_id]
        row["total_seconds"] = await ctx.reports.task_total(task.id)
        row["is_running"] = open_session is not None and open_session.task_id == task.id
        rows.append(row)
    return rows


@app.command("list")
@command_wrapper
async def list_tasks(
    project: str | None = typer.Option(None, "--project", "-p", help="Only this project"),
    pending: bool = typer.Option(False, "--pending", help="Hide completed tasks"),
    output: str | None = output_option(),
) -> None:
    """List tasks."""
    ctx = get_app_context()
    project_id = (await ctx.projects.resolve(project)).id if project else None
    tasks = await ctx.tasks.list_tasks(project_id=project_id, include_completed=not pending)
    format_output(await _task_rows(ctx, tasks), resolve_output(ctx, output), pretty=render_tasks)


@app.command("add")
@command_wrapper
async def add_task(
    project: str = typer.Argument(..., help="Project id, id prefix or name"),
    name: str = typer.Argument(..., help="Task name"),
) -> None:
    """Add a task to a project."""
    ctx = get_app_context()
    target = await ctx.projects.resolve(project)
    task = await ctx.tasks.create_task(target.id, name)
    format_success(f"Task created: {task.name} (#{task.id[:8]}) in {target.name}")


@app.command("rename")
@command_wrapper
async def rename_task(
    task: str = typer.Argument(..., help="Task id, id prefix or name"),
    name: str = typer.Argument(..., help="New name"),
) -> None:
    """Rename a task."""
    ctx = get_app_context()
    renamed = await ctx.tasks.rename_task(task, name)
    format_success(f"Task renamed: {renamed.name}")


@app.command("done")
@command_wrapper
async def complete_task(
    task: str = typer.Argument(..., help="Task id, id prefix or name"),
    undo: bool = typer.Option(False, "--undo", help="Mark as not completed"),
) -> None:
    """Mark a task as completed."""
    ctx = get_app_context()
    updated = await ctx.tasks.set_completed(task, completed=not undo)
    state = "reopened" if undo else "completed"
    format_success(f"Task {state}: {updated.name}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task: str = typer.Argument(..., help="Task id, id prefix or name"),
) -> None:
    """Move a task to the trash. Tracked time is kept."""
    ctx = get_app_context()
    deleted = await ctx.tasks.delete_task(task)
    format_success(f"Task moved to trash: {deleted.name}")


@app.command("restore")
@command_wrapper
async def restore_task(
    task: str = typer.Argument(..., help="Task id, id prefix or name"),
) -> None:
    """Restore a task from the trash."""
    ctx = get_app_context()
    restored = await ctx.tasks.restore_task(task)
    format_success(f"Task restored: {restored.name}")


@app.command("purge")
@command_wrapper
async def purge_task(
    task: str = typer.Argument(..., help="Task id, id prefix or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Permanently delete a task and its time entries."""
    ctx = get_app_context()
    target = await ctx.tasks.resolve(task, include_deleted=True)
    if not yes and not typer.confirm(
        f"Permanently delete '{target.name}' and all its time entries?"
    ):
        format_info("Cancelled")
        raise typer.Exit(0)

    await ctx.tasks.purge_task(target.id)
    format_success(f"Task purged: {target.name}")


@app.command("trash")
@command_wrapper
async def list_trash(
    output: str | None = output_option(),
) -> None:
    """List tasks in the trash."""
    ctx = get_app_context()
    tasks = await ctx.tasks.list_trash()
    format_output(await _task_rows(ctx, tasks), resolve_output(ctx, output), pretty=render_tasks)


@app.command("empty-trash")
@command_wrapper
async def empty_trash(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Permanently delete every task in the trash."""
    ctx = get_app_context()
    if not yes and not typer.confirm("Permanently delete all tasks in the trash?"):
        format_info("Cancelled")
        raise typer.Exit(0)

    count = await ctx.tasks.empty_trash()
    format_success(f"Deleted {count} task(s) from the trash")
