"""Pomodoro settings commands."""

from typing import Annotated

import typer

from focusnote.services.context_manager import get_services
from focusnote.utils.typer_helpers import SuggestingGroup
from focusnote.utils.ui.console import get_console
from focusnote.utils.ui.formatters import format_single_item, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Pomodoro settings")
console = get_console()


@app.command("show")
@command_wrapper
def show_settings(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "table",
) -> None:
    """Show the current Pomodoro settings."""
    settings = get_services().settings.get()
    if output == "json":
        console.print_json(data=settings.model_dump())
        return
    format_single_item(settings.model_dump())


@app.command("set")
@command_wrapper
def set_settings(
    work: Annotated[int | None, typer.Option("--work", help="Work minutes")] = None,
    short_break: Annotated[
        int | None, typer.Option("--short-break", help="Short break minutes")
    ] = None,
    long_break: Annotated[
        int | None, typer.Option("--long-break", help="Long break minutes")
    ] = None,
    sessions: Annotated[
        int | None,
        typer.Option("--sessions-until-long-break", help="Work sessions before a long break"),
    ] = None,
    auto_start_breaks: Annotated[
        bool | None, typer.Option("--auto-start-breaks/--no-auto-start-breaks")
    ] = None,
    auto_start_pomodoros: Annotated[
        bool | None, typer.Option("--auto-start-pomodoros/--no-auto-start-pomodoros")
    ] = None,
) -> None:
    """Change one or more Pomodoro settings."""
    changes = {
        key: value
        for key, value in {
            "work_duration": work,
            "short_break_duration": short_break,
            "long_break_duration": long_break,
            "sessions_until_long_break": sessions,
            "auto_start_breaks": auto_start_breaks,
            "auto_start_pomodoros": auto_start_pomodoros,
        }.items()
        if value is not None
    }
    settings_service = get_services().settings
    settings = settings_service.set(**changes)
    format_success("Settings saved")
    format_single_item(settings.model_dump())


@app.command("reset")
@command_wrapper
def reset_settings() -> None:
    """Restore the default Pomodoro settings."""
    get_services().settings.reset()
    format_success("Settings reset to defaults")
