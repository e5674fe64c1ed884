"""Task queue commands: add, list, count, clear."""

from __future__ import annotations

import typer

from pomodoro_cli.ui.formatters import (
    format_info,
    format_success,
    format_task_table,
    format_warning,
)
from pomodoro_cli.utils.ui.console import get_console

from .decorators import command_wrapper
from .utils import build_service

console = get_console()


@command_wrapper
def add_task(
    name: str | None = typer.Argument(
        None, help="Task name; '@word' adds a tag. Asks for a name when omitted."
    ),
    tags: list[str] | None = typer.Option(
        None, "--tag", "-t", help="Tag for the task (repeatable)"
    ),
) -> None:
    """Add a task to the end of the queue."""
    service = build_service(console)
    service.load()
    task = service.add_task(name, tags or ())

    if task is None:
        format_warning("No task added")
        return
    tag_text = f" [dim]({', '.join('@' + t for t in task.tags)})[/dim]" if task.tags else ""
    format_success(f"Added '{task.name}'{tag_text}")


@command_wrapper
def list_tasks(
    tag: str | None = typer.Option(None, "--tag", "-t", help="Only tasks with this tag"),
) -> None:
    """Show the task queue."""
    service = build_service(console)
    service.load()

    tasks = service.tasks
    current = service.current_task_index
    if tag:
        tasks = [task for task in tasks if task.has_tag(tag)]
        current = None
    format_task_table(tasks, current)


@command_wrapper
def count_finished(
    tag: str | None = typer.Option(None, "--tag", "-t", help="Only count tasks with this tag"),
) -> None:
    """Print the number of finished tasks."""
    service = build_service(console)
    service.load()
    console.print(service.get_finished_tasks_count(tag))


@command_wrapper
def clear_completed(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove completed tasks from the queue."""
    service = build_service(console)
    service.load()
    finished = service.get_finished_tasks_count()
    if finished == 0:
        format_info("No completed tasks to clear")
        return
    if not yes and not typer.confirm(f"Remove {finished} completed task(s)?"):
        format_warning("Cancelled")
        raise typer.Exit(0)

    service.clear_completed()
    format_success(f"Cleared {finished} completed task(s)")
