"""Task management commands."""

from typing import Annotated

import typer

from focusnote.models import TASK_PRIORITIES, TASK_STATUSES, TaskUpdate
from focusnote.services.context_manager import get_services
from focusnote.utils.typer_helpers import SuggestingGroup
from focusnote.utils.ui.console import get_console
from focusnote.utils.ui.formatters import format_output, format_success, format_warning
from focusnote.utils.uuid_utils import resolve_task_id, shorten_uuid

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
console = get_console()

OutputOption = Annotated[str, typer.Option("--output", "-o", help="Output format (table, json)")]
STATUS_HELP = f"One of: {', '.join(TASK_STATUSES)}"
PRIORITY_HELP = f"One of: {', '.join(TASK_PRIORITIES)}"


@app.command("add")
@command_wrapper
async def add_task(
    title: Annotated[str, typer.Argument(help="Task title")],
    note: Annotated[str | None, typer.Option("--note", help="Originating note id")] = None,
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Description")
    ] = None,
    priority: Annotated[str, typer.Option("--priority", "-p", help=PRIORITY_HELP)] = "medium",
    due: Annotated[str | None, typer.Option("--due", help="Due date (ISO format)")] = None,
    estimate: Annotated[
        int | None, typer.Option("--estimate", help="Estimated minutes")
    ] = None,
    tags: Annotated[list[str] | None, typer.Option("--tag", help="Tag (repeatable)")] = None,
    output: OutputOption = "table",
) -> None:
    """Create a task."""
    services = get_services()
    task = await services.tasks.add_task(
        title,
        note_id=note,
        description=description,
        priority=priority,
        due_date=due,
        estimated_minutes=estimate,
        tags=tags,
    )
    if output == "json":
        format_output(task, output)
        return
    format_success(f"Created task {shorten_uuid(task.id)}: {task.title}")


@app.command("list")
@command_wrapper
async def list_tasks(
    status: Annotated[str | None, typer.Option("--status", help=STATUS_HELP)] = None,
    note: Annotated[str | None, typer.Option("--note", help="Filter by note id")] = None,
    output: OutputOption = "table",
) -> None:
    """List tasks."""
    if status and status not in TASK_STATUSES:
        raise ValueError(f"Unknown status '{status}'. {STATUS_HELP}")

    services = get_services()
    if note:
        tasks = await services.tasks.list_by_note(note)
    else:
        tasks = await services.tasks.list_all()
    if status:
        tasks = [t for t in tasks if t.status == status]
    format_output(tasks, output)


@app.command("show")
@command_wrapper
async def show_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or prefix")],
    output: OutputOption = "table",
) -> None:
    """Show one task with its tracked time."""
    services = get_services()
    task = await services.tasks.get(await resolve_task_id(services.tasks, task_id))
    format_output(task, output)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or prefix")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="New description")
    ] = None,
    status: Annotated[str | None, typer.Option("--status", help=STATUS_HELP)] = None,
    priority: Annotated[str | None, typer.Option("--priority", "-p", help=PRIORITY_HELP)] = None,
    due: Annotated[str | None, typer.Option("--due", help="Due date (ISO format)")] = None,
    estimate: Annotated[
        int | None, typer.Option("--estimate", help="Estimated minutes")
    ] = None,
    tags: Annotated[
        list[str] | None, typer.Option("--tag", help="Replace tags (repeatable)")
    ] = None,
    output: OutputOption = "table",
) -> None:
    """Update fields of a task. Only given options change."""
    fields = {
        "title": title,
        "description": description,
        "status": status,
        "priority": priority,
        "due_date": due,
        "estimated_minutes": estimate,
        "tags": tags,
    }
    changes = {key: value for key, value in fields.items() if value is not None}
    if not changes:
        format_warning("Nothing to update")
        return

    services = get_services()
    resolved_id = await resolve_task_id(services.tasks, task_id)
    task = await services.tasks.update_task(resolved_id, **changes)
    if output == "json":
        format_output(task, output)
        return
    format_success(f"Updated task {shorten_uuid(task.id)}")


@app.command("done")
@command_wrapper
async def complete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or prefix")],
) -> None:
    """Mark a task as done. A running session for it is not stopped."""
    services = get_services()
    resolved_id = await resolve_task_id(services.tasks, task_id)
    task = await services.timer.complete_task(resolved_id)
    format_success(f"Completed: {task.title}")

    open_session = await services.sessions.get_open_session()
    if open_session is not None and open_session.task_id == task.id:
        console.print("[dim]A session is still open for this task: focusnote timer stop[/dim]")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or prefix")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete a task. Its recorded sessions are kept."""
    services = get_services()
    resolved_id = await resolve_task_id(services.tasks, task_id)
    task = await services.tasks.get(resolved_id)
    if not yes and not typer.confirm(f"Delete task '{task.title}'?"):
        raise typer.Exit(0)
    await services.tasks.delete(resolved_id)
    format_success(f"Deleted task {shorten_uuid(resolved_id)}")


@app.command("import")
@command_wrapper
async def import_tasks(
    source: Annotated[
        typer.FileText, typer.Argument(help="File with one task title per line ('-' for stdin)")
    ],
    note: Annotated[str | None, typer.Option("--note", help="Note the tasks come from")] = None,
    output: OutputOption = "table",
) -> None:
    """Create one task per line of text, linked to a note."""
    titles = source.read().splitlines()
    services = get_services()
    created = await services.tasks.create_batch(note, titles)
    if output == "json":
        format_output(created, output)
        return
    format_success(f"Imported {len(created)} task(s)")
    format_output(created, output)
