"""Command 'version' of focusnote"""

import typer

from focusnote import __version__
from focusnote.utils.ui.console import get_console

app = typer.Typer()
console = get_console(highlight=False)


@app.command()
def version() -> None:
    """Show version information"""
    console.print(__version__)
