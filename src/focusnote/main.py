"""Main entry point for focusnote."""

import typer

from focusnote.commands import sessions, settings, stats, tasks, timer, version_command
from focusnote.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="focusnote",
    cls=SuggestingGroup,
    help="Tasks and Pomodoro sessions for your notes",
    no_args_is_help=True,
)

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(sessions.app, name="sessions", help="Work session history")
app.add_typer(timer.app, name="timer", help="Pomodoro timer for focus sessions")
app.add_typer(settings.app, name="settings", help="Pomodoro settings")
app.add_typer(stats.app)
app.add_typer(version_command.app)


if __name__ == "__main__":
    app()
