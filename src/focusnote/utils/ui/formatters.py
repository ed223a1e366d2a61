"""Output formatters for different formats."""

import json
from datetime import datetime
from typing import Any

from rich.table import Table

from focusnote.models import Task, TaskSession, TaskStats, TimerState
from focusnote.utils.clock import format_duration
from focusnote.utils.ui.console import get_console
from focusnote.utils.uuid_utils import shorten_uuid

console = get_console()

STATUS_STYLES = {
    "todo": "white",
    "in_progress": "yellow",
    "done": "green",
    "cancelled": "dim",
}

PRIORITY_STYLES = {
    "low": "dim",
    "medium": "white",
    "high": "bold red",
}


def format_output(data: Any, output_format: str = "table") -> None:
    """Print *data* as JSON or through the rich table formatters."""
    if output_format == "json":
        print(json.dumps(_to_jsonable(data), indent=2, default=str))
    elif isinstance(data, list) and data and isinstance(data[0], Task):
        format_tasks_table(data)
    elif isinstance(data, list) and data and isinstance(data[0], TaskSession):
        format_sessions_table(data)
    elif isinstance(data, Task):
        format_single_item(data.model_dump())
    elif isinstance(data, dict):
        format_single_item(data)
    elif not data:
        console.print("[yellow]No items found[/yellow]")
    else:
        console.print(data)


def _to_jsonable(data: Any) -> Any:
    if isinstance(data, list):
        return [_to_jsonable(item) for item in data]
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if isinstance(data, TimerState):
        return data.to_dict()
    return data


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "-"
    if value is None:
        return "-"
    if isinstance(value, datetime):
        return format_timestamp(value)
    return str(value)


def format_timestamp(value: datetime | None) -> str:
    """Local-time ``YYYY-MM-DD HH:MM``."""
    if value is None:
        return "-"
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def format_tasks_table(tasks: list[Task]) -> None:
    """Format tasks as a table."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Priority")
    table.add_column("Spent", justify="right")

    for task in tasks:
        status_style = STATUS_STYLES.get(task.status, "white")
        priority_style = PRIORITY_STYLES.get(task.priority, "white")
        table.add_row(
            shorten_uuid(task.id),
            task.title,
            f"[{status_style}]{task.status}[/{status_style}]",
            f"[{priority_style}]{task.priority}[/{priority_style}]",
            format_duration(task.actual_minutes),
        )

    console.print(table)


def format_sessions_table(sessions: list[TaskSession]) -> None:
    """Format sessions as a table."""
    if not sessions:
        console.print("[yellow]No sessions found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Started")
    table.add_column("Ended")
    table.add_column("Minutes", justify="right")
    table.add_column("Done")
    table.add_column("Achievement")

    for session in sessions:
        table.add_row(
            shorten_uuid(session.id),
            format_timestamp(session.started_at),
            format_timestamp(session.ended_at) if session.ended_at else "[yellow]open[/yellow]",
            str(session.duration_minutes),
            _format_value(session.completed),
            session.achievement or "-",
        )

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _format_value(value))

    console.print(table)


def format_task_stats(stats: TaskStats, total_minutes: int) -> None:
    """Show task counts by status and the total time tracked."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total", str(stats.total))
    table.add_row("Todo", str(stats.todo))
    table.add_row("In progress", str(stats.in_progress))
    table.add_row("Done", str(stats.done))
    table.add_row("Cancelled", str(stats.cancelled))
    table.add_row("Time tracked", format_duration(total_minutes))

    console.print(table)


def format_timer_state(state: TimerState, task: Task | None = None) -> None:
    """Show the countdown and the task it is running for."""
    if task is not None:
        console.print(f"[bold]Task:[/bold] {task.title} [dim]({shorten_uuid(task.id)})[/dim]")
    console.print(
        f"[bold]Timer:[/bold] {state.formatted_remaining} {get_progress_bar(state.progress)} "
        f"[dim]{state.phase}, {state.progress:.0f}% elapsed[/dim]"
    )


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


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
