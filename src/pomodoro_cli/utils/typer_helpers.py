"""Typo suggestions for the CLI and the session shell."""

from collections.abc import Iterable
from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from pomodoro_cli.utils import exit_codes
from pomodoro_cli.utils.ui.console import get_console


def suggest(attempted: str, choices: Iterable[str], n: int = 3) -> list[str]:
    """Close matches for a mistyped command name."""
    return get_close_matches(attempted, list(choices), n=n, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Typer group that answers an unknown command with "Did you mean ...?"."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            suggestions = suggest(args[0], self.commands) if args else []
            if not suggestions:
                raise

            console = get_console()
            console.print(f'[red]Error:[/red] unknown command "{args[0]}" for "{ctx.info_name}"')
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(exit_codes.ERROR_INVALID_ARGS) from e
