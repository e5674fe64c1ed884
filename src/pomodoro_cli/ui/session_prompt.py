"""Interactive focus session: one prompt line shared by commands and questions.

Timer threads may ask "did you finish?" at any moment while the command
prompt is waiting for input. Such questions are queued in
:class:`PendingQuestions` and printed; the next yes/no line typed at the
prompt answers the oldest one. Any other line is still treated as a command,
so the session can be paused or finished while a question is open.
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from concurrent.futures import Future

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.prompt import Confirm, Prompt

from pomodoro_cli.models.exceptions import StorageIOError
from pomodoro_cli.models.focus.ui import render_status_panel
from pomodoro_cli.repositories.repository import ConfirmPrompt, InputPrompt
from pomodoro_cli.services.pomodoro_service import PomodoroService
from pomodoro_cli.ui.formatters import format_task_table
from pomodoro_cli.utils.logger import get_logger
from pomodoro_cli.utils.typer_helpers import suggest

LineReader = Callable[..., str]

YES_WORDS = frozenset({"y", "yes"})
NO_WORDS = frozenset({"n", "no"})

SHELL_COMMANDS = {
    "add": "add [name] [@tag ...]  add a task (asks for a name if omitted)",
    "run": "start or resume focus on the next task",
    "pause": "pause the running focus interval",
    "finish": "mark the current task done and take a break",
    "clear": "remove completed tasks from the queue",
    "count": "count [tag]  number of finished tasks",
    "list": "show the task queue",
    "status": "show the session state",
    "help": "show this help",
    "quit": "save and leave the session",
}

PROMPT_STYLE = Style.from_dict({"prompt": "ansicyan bold"})


class PendingQuestions:
    """FIFO of yes/no questions waiting for an answer from the prompt line."""

    def __init__(self):
        self._lock = threading.Lock()
        self._pending: deque[tuple[str, Future]] = deque()

    def put(self, question: str) -> Future:
        future: Future = Future()
        with self._lock:
            self._pending.append((question, future))
        return future

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return bool(self._pending)

    def answer(self, value: bool) -> str | None:
        """Resolve the oldest question; returns it, or None if nothing is open."""
        with self._lock:
            if not self._pending:
                return None
            question, future = self._pending.popleft()
        future.set_result(value)
        return question

    def cancel_all(self) -> None:
        """Answer every open question with "no"."""
        while self.answer(False) is not None:
            pass


class TerminalConfirmPrompt(ConfirmPrompt):
    """Asks a yes/no question and waits for the answer from the shell."""

    def __init__(self, questions: PendingQuestions, console: Console):
        self.questions = questions
        self.console = console

    def ask(self, question: str) -> bool:
        future = self.questions.put(question)
        self.console.print(f"\n[bold yellow]?[/bold yellow] {question} [dim](y/n)[/dim]")
        return bool(future.result())


class TerminalInputPrompt(InputPrompt):
    """Reads a line of text; Ctrl-C or Ctrl-D count as an empty answer."""

    def __init__(self, read_line: LineReader):
        self.read_line = read_line

    def ask(self, title: str, placeholder: str) -> str:
        try:
            return self.read_line(f"{title}: ", placeholder=placeholder).strip()
        except (EOFError, KeyboardInterrupt):
            return ""


class SessionShell:
    """Dispatches prompt lines to the session controller."""

    def __init__(
        self,
        service: PomodoroService,
        questions: PendingQuestions,
        console: Console,
    ):
        self.service = service
        self.questions = questions
        self.console = console
        self.logger = get_logger("shell")

    def handle_line(self, line: str) -> bool:
        """Handle one input line. Returns False when the session should end."""
        text = line.strip()
        word = text.lower()

        if self.questions.has_pending and (not text or word in YES_WORDS | NO_WORDS):
            self.questions.answer(word in YES_WORDS)
            return True
        if not text:
            return True

        command, _, rest = text.partition(" ")
        command = command.lower()
        rest = rest.strip()

        if command in ("quit", "exit"):
            return False

        try:
            self._dispatch(command, rest)
        except StorageIOError as e:
            self.console.print(f"[bold red]Error:[/bold red] {e}")
        return True

    def _dispatch(self, command: str, rest: str) -> None:
        service = self.service
        if command == "add":
            task = service.add_task(rest or None)
            if task is None:
                self.console.print("[yellow]No task added[/yellow]")
        elif command == "run":
            service.run()
            if service.phase == "idle":
                self.console.print("[yellow]Nothing to work on: the queue is empty or done[/yellow]")
        elif command == "pause":
            service.pause()
        elif command == "finish":
            service.stop_task()
        elif command == "clear":
            service.clear_completed()
        elif command == "count":
            count = service.get_finished_tasks_count(rest or None)
            suffix = f" tagged @{rest.lstrip('@')}" if rest else ""
            self.console.print(f"{count} finished task(s){suffix}")
        elif command == "list":
            format_task_table(service.tasks, service.current_task_index)
        elif command == "status":
            self.console.print(render_status_panel(service.snapshot(), service.break_progress))
        elif command == "help":
            for name, description in SHELL_COMMANDS.items():
                self.console.print(f"  [cyan]{name:<8}[/cyan] {description}")
        else:
            self.logger.debug("Unknown shell command %r", command)
            close = suggest(command, SHELL_COMMANDS, n=1)
            hint = f"did you mean '{close[0]}'?" if close else "type 'help'"
            self.console.print(f"[red]Unknown command:[/red] {command} [dim]({hint})[/dim]")

    def loop(self, read_line: LineReader) -> None:
        """Read and handle lines until quit, Ctrl-C or Ctrl-D."""
        try:
            while True:
                try:
                    line = read_line("pomodoro> ")
                except (EOFError, KeyboardInterrupt):
                    break
                if not self.handle_line(line):
                    break
        finally:
            self.questions.cancel_all()


def create_line_reader() -> LineReader:
    """prompt_toolkit reader with command completion."""
    session: PromptSession = PromptSession(
        completer=WordCompleter(list(SHELL_COMMANDS), ignore_case=True),
        style=PROMPT_STYLE,
    )

    def read_line(message: str, placeholder: str = "") -> str:
        return session.prompt(
            [("class:prompt", message)],
            placeholder=placeholder or None,
        )

    return read_line


class RichConfirmPrompt(ConfirmPrompt):
    """Yes/no question for one-shot commands, which own the terminal."""

    def __init__(self, console: Console):
        self.console = console

    def ask(self, question: str) -> bool:
        try:
            return Confirm.ask(question, default=False, console=self.console)
        except (EOFError, KeyboardInterrupt):
            return False


class RichInputPrompt(InputPrompt):
    """Text question for one-shot commands."""

    def __init__(self, console: Console):
        self.console = console

    def ask(self, title: str, placeholder: str) -> str:
        try:
            answer = Prompt.ask(
                f"{title} [dim]({placeholder})[/dim]", default="", console=self.console
            )
        except (EOFError, KeyboardInterrupt):
            return ""
        return answer.strip()
