"""Output formatters for different formats."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from worklog_cli.models.config_models import MoneyConfig
from worklog_cli.utils.calculations import format_money
from worklog_cli.utils.time_format import format_clock, format_date, format_duration

from .console import get_console

console = get_console()

PrettyRenderer = Callable[[Any], None]


def format_output(
    data: Any,
    output_format: str = "pretty",
    pretty: PrettyRenderer | None = None,
) -> None:
    """Format and display output based on format.

    Args:
        data: JSON-compatible dicts/lists
        output_format: ``pretty``, ``table``, ``json`` or ``yaml``
        pretty: Renderer for the ``pretty`` format; falls back to a table
    """
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif output_format == "table":
        format_table(data)
    elif pretty is not None:
        pretty(data)
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*[_cell(item.get(col)) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================


def short_id(value: str | None) -> str:
    return value[:8] if value else "-"


def render_projects(projects: list[dict]) -> None:
    if not projects:
        console.print("[yellow]No projects yet[/yellow]")
        return

    for project in projects:
        line = Text()
        line.append("● ", style=project.get("color") or "white")
        line.append(project["name"], style="bold")
        line.append(f"  #{short_id(project['id'])}", style="dim")
        if project.get("hourly_rate"):
            line.append(f"  {project['hourly_rate']:g}/h", style="cyan")
        if project.get("deleted_at"):
            line.append("  (in trash)", style="yellow")
        console.print(line)


def render_tasks(tasks: list[dict]) -> None:
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    for task in tasks:
        line = Text()
        done = task.get("completed")
        line.append("[x] " if done else "[ ] ", style="green" if done else "white")
        line.append(task["name"], style="dim strike" if done else "bold")
        line.append(f"  #{short_id(task['id'])}", style="dim")
        if task.get("project_name"):
            line.append(f"  {task['project_name']}", style="cyan")
        if "total_seconds" in task:
            line.append(f"  {format_duration(task['total_seconds'])}", style="magenta")
        if task.get("is_running"):
            line.append("  ⏱ running", style="bold red")
        console.print(line)


def render_sessions(sessions: list[dict]) -> None:
    if not sessions:
        console.print("[yellow]No time entries[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Task")
    table.add_column("Date")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Duration", justify="right")

    for session in sessions:
        start = session["start_time"]
        end = session.get("end_time")
        table.add_row(
            short_id(session["id"]),
            session.get("task_name") or short_id(session["task_id"]),
            format_date(start),
            format_clock(start),
            format_clock(end) if end else "[bold red]running[/bold red]",
            format_duration(session["duration_seconds"]) if end else "-",
        )

    console.print(table)


def render_report(report: list[dict], money: MoneyConfig | None = None) -> None:
    """Totals per project with per-task breakdown."""
    if not report:
        console.print("[yellow]Nothing tracked yet[/yellow]")
        return

    money = money or MoneyConfig()

    def fmt_money(amount: int) -> str:
        return format_money(amount, money.currency_symbol, money.thousands_separator)

    grand_seconds = 0
    grand_cost = 0
    for project in report:
        table = Table(
            title=f"{project['project_name']}",
            title_justify="left",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Task")
        table.add_column("Time", justify="right")
        table.add_column("Cost", justify="right")

        for task in project["tasks"]:
            table.add_row(
                task["task_name"],
                format_duration(task["seconds"]),
                fmt_money(task["cost"]) if project["hourly_rate"] else "-",
            )
        table.add_section()
        table.add_row(
            "[bold]Total[/bold]",
            f"[bold]{format_duration(project['seconds'])}[/bold]",
            f"[bold]{fmt_money(project['cost'])}[/bold]" if project["hourly_rate"] else "-",
        )
        console.print(table)

        grand_seconds += project["seconds"]
        grand_cost += project["cost"]

    console.print(
        f"\n[bold]All projects:[/bold] {format_duration(grand_seconds)}"
        f"  [green]{fmt_money(grand_cost)}[/green]"
    )
