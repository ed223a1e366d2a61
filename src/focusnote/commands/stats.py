"""Command 'stats' of focusnote"""

from typing import Annotated

import typer
from rich.table import Table

from focusnote.services.context_manager import get_services
from focusnote.utils.clock import format_duration
from focusnote.utils.ui.console import get_console
from focusnote.utils.ui.formatters import format_task_stats
from focusnote.utils.uuid_utils import shorten_uuid

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("stats")
@command_wrapper
async def show_stats(
    by_task: Annotated[
        bool, typer.Option("--by-task", help="Also show time tracked per task")
    ] = False,
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "table",
) -> None:
    """Show task counts by status and tracked time."""
    services = get_services()
    stats = await services.stats.get_task_stats()
    per_task = await services.stats.time_by_task()
    total_minutes = sum(per_task.values())

    if output == "json":
        console.print_json(
            data={**stats.model_dump(), "total_minutes": total_minutes, "by_task": per_task}
        )
        return

    format_task_stats(stats, total_minutes)
    if not by_task or not per_task:
        return

    titles = {t.id: t.title for t in await services.tasks.list_all()}
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Task")
    table.add_column("Time", justify="right")
    for task_id, minutes in sorted(per_task.items(), key=lambda item: -item[1]):
        table.add_row(
            shorten_uuid(task_id),
            titles.get(task_id, "[dim](deleted)[/dim]"),
            format_duration(minutes),
        )
    console.print()
    console.print(table)
