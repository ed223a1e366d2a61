"""Pomodoro timer commands."""

import asyncio
from typing import Annotated

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from focusnote.models import Task, TimerState
from focusnote.services.context_manager import Services, get_services
from focusnote.services.timer_service import TimerService
from focusnote.utils.typer_helpers import SuggestingGroup
from focusnote.utils.ui.console import get_console
from focusnote.utils.ui.formatters import (
    format_info,
    format_success,
    format_timer_state,
    format_warning,
)
from focusnote.utils.uuid_utils import resolve_task_id

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Pomodoro timer for focus sessions")
console = get_console()


async def run_countdown(timer: TimerService, task: Task) -> bool:
    """Show a live countdown until it finishes or the user presses Ctrl+C.

    Returns:
        True if the countdown reached zero, False if it was interrupted
    """
    finished = asyncio.Event()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.fields[remaining]}"),
        console=console,
        transient=True,
    ) as progress:
        bar = progress.add_task(task.title, total=timer.state.total_time, remaining="")

        def on_change(state: TimerState) -> None:
            progress.update(
                bar,
                completed=state.total_time - state.time_remaining,
                remaining=f"{state.formatted_remaining} {state.phase}",
            )
            if state.phase == "completed":
                finished.set()

        unsubscribe = timer.subscribe(on_change)
        on_change(timer.state)
        try:
            await finished.wait()
        except asyncio.CancelledError:
            # Ctrl+C under asyncio.run cancels the main task
            current = asyncio.current_task()
            if current is not None:
                current.uncancel()
            return False
        finally:
            unsubscribe()
    return True


async def finish_session(
    services: Services,
    completed: bool,
    achievement: str | None = None,
    pending: str | None = None,
) -> None:
    """Close the running session, asking for notes when the pomodoro finished."""
    if completed and achievement is None:
        achievement = typer.prompt("What did you achieve?", default="", show_default=False)
        pending = typer.prompt("What is still pending?", default="", show_default=False)

    session = await services.timer.stop_task(
        achievement=achievement or None, pending=pending or None
    )
    if session is None:
        format_info("No session is running")
        return
    label = "Completed" if session.completed else "Stopped"
    format_success(f"{label} session: {session.duration_minutes} min credited")


@app.command("start")
@command_wrapper
async def start_timer(
    task_id: Annotated[str, typer.Argument(help="Task ID or prefix")],
    detach: Annotated[
        bool,
        typer.Option("--detach", help="Start the session and return; stop it later"),
    ] = False,
) -> None:
    """Start a Pomodoro session for a task."""
    services = get_services()
    resolved_id = await resolve_task_id(services.tasks, task_id)
    task = await services.tasks.get(resolved_id)

    await services.timer.start_task(resolved_id)
    state = services.timer.state
    format_success(f"Started {state.total_time // 60} min session for: {task.title}")

    try:
        if detach:
            console.print("[dim]Stop it with: focusnote timer stop[/dim]")
            return
        completed = await run_countdown(services.timer, task)
        await finish_session(services, completed)
    finally:
        services.timer.shutdown()


@app.command("resume")
@command_wrapper
async def resume_timer() -> None:
    """Resume the countdown of a session left running."""
    services = get_services()
    session = await services.timer.restore()
    if session is None:
        format_info("No session is running")
        return

    try:
        task = await services.tasks.get(session.task_id)
        completed = services.timer.state.phase == "completed" or await run_countdown(
            services.timer, task
        )
        await finish_session(services, completed)
    finally:
        services.timer.shutdown()


@app.command("status")
@command_wrapper
async def timer_status(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "table",
) -> None:
    """Show the running session, if any."""
    services = get_services()
    session = await services.timer.restore()
    services.timer.shutdown()

    if output == "json":
        console.print_json(
            data={
                "session_id": session.id if session else None,
                "task_id": session.task_id if session else None,
                **services.timer.state.to_dict(),
            }
        )
        return

    if session is None:
        format_info("No session is running")
        return
    task = await services.tasks.get(session.task_id)
    format_timer_state(services.timer.state, task)


@app.command("stop")
@command_wrapper
async def stop_timer(
    achievement: Annotated[
        str | None, typer.Option("--achievement", "-a", help="What was achieved")
    ] = None,
    pending: Annotated[
        str | None, typer.Option("--pending", "-p", help="What is still pending")
    ] = None,
) -> None:
    """Stop the running session and credit its time to the task."""
    services = get_services()
    session = await services.timer.restore()
    services.timer.shutdown()
    if session is None:
        format_warning("No session is running")
        return
    await finish_session(services, completed=False, achievement=achievement, pending=pending)
