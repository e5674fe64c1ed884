"""Main entry point for Pomodoro CLI."""

import typer

from pomodoro_cli import __version__
from pomodoro_cli.commands import config_command, focus, tasks
from pomodoro_cli.utils.typer_helpers import SuggestingGroup
from pomodoro_cli.utils.ui.console import get_console

app = typer.Typer(
    name="pomodoro",
    cls=SuggestingGroup,
    help="Work through a task queue in Pomodoro focus intervals and breaks",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(config_command.app, name="config", help="Configuration management")

app.command("add")(tasks.add_task)
app.command("list")(tasks.list_tasks)
app.command("count")(tasks.count_finished)
app.command("clear")(tasks.clear_completed)
app.command("start")(focus.start_session)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Pomodoro CLI[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
