"""Project management commands."""

import typer

from worklog_cli.services.app_context import get_app_context
from worklog_cli.utils.typer_helpers import SuggestingGroup
from worklog_cli.utils.ui.formatters import (
    format_info,
    format_output,
    format_success,
    render_projects,
)

from .decorators import command_wrapper
from .utils import output_option, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


@app.command("list")
@command_wrapper
async def list_projects(
    trash: bool = typer.Option(False, "--trash", help="Show projects in the trash"),
    output: str | None = output_option(),
) -> None:
    """List projects."""
    ctx = get_app_context()
    if trash:
        projects = await ctx.projects.list_deleted()
    else:
        projects = await ctx.projects.list_projects()
    format_output(
        [p.model_dump() for p in projects], resolve_output(ctx, output), pretty=render_projects
    )


@app.command("add")
@command_wrapper
async def add_project(
    name: str = typer.Argument(..., help="Project name"),
    rate: float = typer.Option(0, "--rate", "-r", min=0, help="Hourly rate"),
    color: str | None = typer.Option(None, "--color", help="Hex color, e.g. #6366F1"),
    output: str | None = output_option(),
) -> None:
    """Create a new project."""
    ctx = get_app_context()
    project = await ctx.projects.create_project(name, hourly_rate=rate, color=color)
    format_success(f"Project created: {project.name} (#{project.id[:8]})")
    if output:
        format_output(project.model_dump(), output)


@app.command("update")
@command_wrapper
async def update_project(
    project: str = typer.Argument(..., help="Project id, id prefix or name"),
    name: str | None = typer.Option(None, "--name", help="New name"),
    rate: float | None = typer.Option(None, "--rate", "-r", min=0, help="New hourly rate"),
    color: str | None = typer.Option(None, "--color", help="New color"),
    output: str | None = output_option(),
) -> None:
    """Update a project."""
    ctx = get_app_context()
    if name is None and rate is None and color is None:
        format_info("No updates specified")
        return

    updated = await ctx.projects.update_project(project, name=name, hourly_rate=rate, color=color)
    format_success(f"Project updated: {updated.name}")
    if output:
        format_output(updated.model_dump(), output)


@app.command("delete")
@command_wrapper
async def delete_project(
    project: str = typer.Argument(..., help="Project id, id prefix or name"),
) -> None:
    """Move a project and its tasks to the trash."""
    ctx = get_app_context()
    deleted = await ctx.projects.delete_project(project)
    format_success(f"Project moved to trash: {deleted.name}")


@app.command("restore")
@command_wrapper
async def restore_project(
    project: str = typer.Argument(..., help="Project id, id prefix or name"),
) -> None:
    """Restore a project and its tasks from the trash."""
    ctx = get_app_context()
    restored = await ctx.projects.restore_project(project)
    format_success(f"Project restored: {restored.name}")


@app.command("purge")
@command_wrapper
async def purge_project(
    project: str = typer.Argument(..., help="Project id, id prefix or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Permanently delete a project, its tasks and all tracked time."""
    ctx = get_app_context()
    target = await ctx.projects.resolve(project, include_deleted=True)
    if not yes and not typer.confirm(
        f"Permanently delete '{target.name}' with all its tasks and time entries?"
    ):
        format_info("Cancelled")
        raise typer.Exit(0)

    await ctx.projects.purge_project(target.id)
    format_success(f"Project purged: {target.name}")
