"""Backup commands: export and import all data as JSON."""

from datetime import date
from pathlib import Path

import typer

from worklog_cli.services.app_context import get_app_context
from worklog_cli.utils.typer_helpers import SuggestingGroup
from worklog_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Data management (export, import)")


@app.command("export")
@command_wrapper
async def export_data(
    path: Path | None = typer.Argument(
        None, help="Output file (default: worklog-backup-YYYY-MM-DD.json)"
    ),
) -> None:
    """Export projects, tasks and time entries to a JSON file."""
    target = path or Path(f"worklog-backup-{date.today().isoformat()}.json")
    ctx = get_app_context()
    document = await ctx.backup.export_to_file(target)
    format_success(
        f"Exported {len(document.projects)} projects, {len(document.tasks)} tasks and "
        f"{len(document.sessions)} time entries to {target}"
    )


@app.command("import")
@command_wrapper
async def import_data(
    path: Path = typer.Argument(..., help="Backup file to import"),
    replace: bool = typer.Option(
        False, "--replace", help="Delete all existing data before importing"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Import a JSON backup. Records with the same id are overwritten."""
    ctx = get_app_context()
    document = ctx.backup.read_file(path)

    if replace and not yes and not typer.confirm("Replace ALL existing data with this backup?"):
        format_info("Cancelled")
        raise typer.Exit(0)

    summary = await ctx.backup.import_document(document, replace=replace)
    format_success(
        f"Imported {summary.projects} projects, {summary.tasks} tasks and "
        f"{summary.sessions} time entries"
    )
