"""Session history commands."""

from typing import Annotated

import typer

from focusnote.services.context_manager import get_services
from focusnote.utils.clock import format_duration
from focusnote.utils.typer_helpers import SuggestingGroup
from focusnote.utils.ui.console import get_console
from focusnote.utils.ui.formatters import format_output
from focusnote.utils.uuid_utils import resolve_id_prefix

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Work session history")
console = get_console()


@app.command("list")
@command_wrapper
async def list_sessions(
    task_id: Annotated[str, typer.Argument(help="Task ID or prefix")],
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "table",
) -> None:
    """List the sessions recorded for a task, including deleted tasks."""
    services = get_services()
    sessions = await services.sessions.list_all()
    known_ids = {t.id for t in await services.tasks.list_all()}
    known_ids.update(s.task_id for s in sessions)
    resolved_id = resolve_id_prefix(task_id, sorted(known_ids), entity="task")

    task_sessions = await services.sessions.get_by_task(resolved_id)
    format_output(task_sessions, output)
    if output != "json" and task_sessions:
        total = await services.sessions.total_time_for_task(resolved_id)
        console.print(f"[bold]Total:[/bold] {format_duration(total)}")
