"""Terminal status output for focus sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel

from pomodoro_cli.repositories.repository import StatusDisplay

if TYPE_CHECKING:
    from pomodoro_cli.services.pomodoro_service import SessionSnapshot


def format_seconds(seconds: float) -> str:
    total = max(0, int(round(seconds)))
    mins, secs = divmod(total, 60)
    return f"{mins:02d}:{secs:02d}"


class RichStatusBar(StatusDisplay):
    """Prints status changes as single lines, remembering the latest values."""

    def __init__(self, console: Console | None = None, icons: bool = True):
        self.console = console or Console()
        self.icons = icons
        self.current_task = "No task"
        self.completed = 0
        self.total = 0
        self.is_running = False

    def _icon(self, emoji: str, fallback: str) -> str:
        return emoji if self.icons else fallback

    def show_current_task(self, label: str) -> None:
        self.current_task = label
        self.console.print(f"{self._icon('🍅', '>')} [bold cyan]{label}[/bold cyan]")

    def show_counts(self, completed: int, total: int) -> None:
        self.completed, self.total = completed, total
        self.console.print(f"{self._icon('✅', '+')} [green]{completed}/{total}[/green] tasks done")

    def show_run_state(self, is_running: bool) -> None:
        self.is_running = is_running
        if is_running:
            self.console.print(f"{self._icon('▶', '>')}  [dim]timer running[/dim]")
        else:
            self.console.print(f"{self._icon('⏸', '=')}  [yellow]timer stopped[/yellow]")

    def show_error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {message}")


_PHASE_STYLES = {
    "idle": ("Idle", "dim"),
    "focusing": ("Focusing", "cyan"),
    "on_break": ("On break", "green"),
    "paused": ("Paused", "yellow"),
}


def render_status_panel(snapshot: SessionSnapshot, progress_dots: str = "") -> Panel:
    """Build the panel shown by the ``status`` command."""
    title, color = _PHASE_STYLES[snapshot.phase]

    if snapshot.current_task_name:
        task_line = snapshot.current_task_name
    elif snapshot.queue_exhausted:
        task_line = "All tasks done"
    else:
        task_line = "N/A"

    lines = [
        f"[bold {color}]{title}[/bold {color}]",
        "",
        f"Task: {task_line}",
        f"Done: {snapshot.completed_tasks}/{snapshot.total_tasks}",
    ]
    if snapshot.remaining_seconds is not None:
        lines.append(f"Remaining: {format_seconds(snapshot.remaining_seconds)}")
    if progress_dots:
        lines.append(f"Breaks: {progress_dots}")

    return Panel("\n".join(lines), border_style=color, padding=(1, 2))
