"""Shared helpers for command modules."""

import typer

from worklog_cli.services.app_context import AppContext
from worklog_cli.utils.typer_helpers import validate_output_format


def output_option() -> str | None:
    return typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: pretty, table, json, yaml (default from config)",
        callback=validate_output_format,
    )


def resolve_output(ctx: AppContext, output: str | None) -> str:
    """Explicit ``--output`` wins over ``output.format`` from config."""
    return output or ctx.config.output.format
