"""Interactive focus session with the Pomodoro timer."""

from __future__ import annotations

from prompt_toolkit.patch_stdout import patch_stdout

from pomodoro_cli.models.focus.ui import format_seconds
from pomodoro_cli.ui.session_prompt import (
    PendingQuestions,
    SessionShell,
    TerminalConfirmPrompt,
    TerminalInputPrompt,
    create_line_reader,
)
from pomodoro_cli.utils.logger import get_logger
from pomodoro_cli.utils.ui.console import get_console

from .decorators import command_wrapper
from .utils import build_service

console = get_console()


@command_wrapper
def start_session() -> None:
    """Open an interactive session; an interrupted task resumes automatically."""
    logger = get_logger("commands.focus")
    read_line = create_line_reader()
    questions = PendingQuestions()
    service = build_service(
        console,
        confirm_prompt=TerminalConfirmPrompt(questions, console),
        input_prompt=TerminalInputPrompt(read_line),
    )
    settings = service.settings

    console.print("\n[bold green]🍅 Pomodoro session[/bold green]")
    console.print(
        f"[dim]Focus {format_seconds(settings.focus_duration)}, "
        f"break {format_seconds(settings.break_duration)}, "
        f"long break {format_seconds(settings.long_break_duration)} "
        f"every {settings.counter_to_long_break} breaks. Type 'help' for commands.[/dim]\n"
    )

    service.preload()
    logger.info("Session opened in phase %s with %d task(s)", service.phase, len(service.tasks))

    shell = SessionShell(service, questions, console)
    try:
        with patch_stdout(raw=True):
            shell.loop(read_line)
    finally:
        service.shutdown()

    console.print("[dim]Session saved. See you next time![/dim]")
