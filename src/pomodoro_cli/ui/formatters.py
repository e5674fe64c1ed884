"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table

from pomodoro_cli.models.task import Task
from pomodoro_cli.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif isinstance(data, dict):
        format_single_item(_flatten(data))
    else:
        console.print(data)


def _flatten(data: dict, prefix: str = "") -> dict:
    """Flatten nested dictionaries into dotted keys (``pomodoro.tasks_file``)."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{full_key}."))
        else:
            flat[full_key] = value
    return flat


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key, _format_value(value))

    console.print(table)


def format_task_table(tasks: list[Task], current_index: int | None = None) -> None:
    """Format the task queue as a table, marking the current task."""
    if not tasks:
        console.print("[yellow]No tasks in the queue[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Task")
    table.add_column("Tags")
    table.add_column("Started")
    table.add_column("Done", justify="center")

    for index, task in enumerate(tasks):
        marker = "▶ " if index == current_index else ""
        started = task.start_time.strftime("%Y-%m-%d %H:%M") if task.start_time else None
        table.add_row(
            str(index + 1),
            f"{marker}{task.name}",
            _format_value(list(task.tags)) if task.tags else "-",
            _format_value(started),
            _format_value(task.is_completed),
        )

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")
