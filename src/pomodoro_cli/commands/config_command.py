"""Configuration management commands."""

from __future__ import annotations

import typer

from pomodoro_cli.services.config_service import get_config_service
from pomodoro_cli.ui.formatters import format_error, format_output, format_success
from pomodoro_cli.utils import exit_codes
from pomodoro_cli.utils.typer_helpers import SuggestingGroup
from pomodoro_cli.utils.ui.console import get_console

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


@app.command("view")
@command_wrapper
def view_config(
    output: str = typer.Option("table", "--output", "-o", help="Output format (table, json, yaml)"),
) -> None:
    """View current configuration."""
    try:
        config_service = get_config_service()
        format_output(config_service.config.model_dump(), output)
        console.print(f"[dim]Task file: {config_service.get_tasks_file()}[/dim]")
    except RuntimeError as e:
        format_error(str(e))
        raise typer.Exit(exit_codes.ERROR_GENERAL) from e


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., pomodoro.break_duration)"),
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if value is None:
        format_error(f"Configuration key '{key}' not found or not set")
        raise typer.Exit(exit_codes.ERROR_NOT_FOUND)
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., pomodoro.break_duration)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_service().set(key, value)
    except KeyError as e:
        format_error(f"Unknown configuration key '{key}'")
        raise typer.Exit(exit_codes.ERROR_NOT_FOUND) from e
    except ValueError as e:
        format_error(str(e))
        raise typer.Exit(exit_codes.ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_error("Cancelled")
            raise typer.Exit(exit_codes.SUCCESS)

    try:
        get_config_service().reset_config(key)
    except KeyError as e:
        format_error(f"Unknown configuration key '{key}'")
        raise typer.Exit(exit_codes.ERROR_NOT_FOUND) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
