"""Time and cost report."""

import typer

from worklog_cli.services.app_context import get_app_context
from worklog_cli.utils.ui.formatters import format_output, render_report

from .decorators import command_wrapper
from .utils import output_option, resolve_output


@command_wrapper
async def report(
    project: str | None = typer.Option(None, "--project", "-p", help="Only this project"),
    output: str | None = output_option(),
) -> None:
    """Show tracked time and cost per project and task."""
    ctx = get_app_context()
    project_id = (await ctx.projects.resolve(project)).id if project else None
    totals = await ctx.reports.project_totals(project_id)
    format_output(
        [total.model_dump() for total in totals],
        resolve_output(ctx, output),
        pretty=lambda rows: render_report(rows, ctx.config.money),
    )
