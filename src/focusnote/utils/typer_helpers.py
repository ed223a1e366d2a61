"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from focusnote.utils.exit_codes import ERROR_INVALID_ARGS
from focusnote.utils.ui.console import get_console


def suggest_commands(attempted: str, names: list[str], limit: int = 3) -> list[str]:
    """Return up to *limit* command names close to *attempted*."""
    return get_close_matches(attempted, sorted(names), n=limit, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Typer group that answers a mistyped subcommand with close matches."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise
            suggestions = suggest_commands(args[0], list(self.commands))
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{args[0]}" for "{ctx.command_path}"'
            )
            heading = "Did you mean this?" if len(suggestions) == 1 else "Did you mean one of these?"
            console.print(f"\n[yellow]{heading}[/yellow]")
            for name in suggestions:
                console.print(f"    {ctx.command_path} {name}")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
