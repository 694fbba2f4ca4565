"""Typer helper utilities."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from worklog_cli.utils.exit_codes import ERROR_INVALID_ARGS
from worklog_cli.utils.ui.console import get_console


class SuggestingGroup(TyperGroup):
    """Typer group that answers an unknown subcommand with close matches."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            attempted = args[0]
            suggestions = get_close_matches(attempted, list(self.commands), n=3, cutoff=0.6)
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.info_name}"'
            )
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(ERROR_INVALID_ARGS) from e


def validate_output_format(value: str | None) -> str | None:
    """Typer callback restricting ``--output`` to the supported formats."""
    if value is None:
        return None
    allowed = ("pretty", "table", "json", "yaml")
    if value not in allowed:
        raise typer.BadParameter(f"must be one of: {', '.join(allowed)}")
    return value
