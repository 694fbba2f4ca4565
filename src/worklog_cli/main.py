"""Main entry point for worklog."""

import typer

from worklog_cli import __version__
from worklog_cli.commands import config, data, focus, log, projects, report, tasks, timer
from worklog_cli.utils.typer_helpers import SuggestingGroup
from worklog_cli.utils.ui.console import get_console

app = typer.Typer(
    name="worklog",
    cls=SuggestingGroup,
    help="Local time tracker with projects, tasks and a Pomodoro focus timer",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(timer.app, name="timer", help="Start and stop the task timer")
app.add_typer(focus.app, name="focus", help="Focus mode with Pomodoro timer")
app.add_typer(log.app, name="log", help="Manual time entries")
app.add_typer(data.app, name="data", help="Data management (export, import)")
app.add_typer(config.app, name="config", help="Configuration management")
app.command("report")(report.report)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]worklog[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
