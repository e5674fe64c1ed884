"""Shared helpers for command modules."""

from __future__ import annotations

from rich.console import Console

from pomodoro_cli.adapters.json_storage import JsonTaskStorage
from pomodoro_cli.models.focus.ui import RichStatusBar
from pomodoro_cli.repositories.repository import ConfirmPrompt, InputPrompt
from pomodoro_cli.services.config_service import get_config_service
from pomodoro_cli.services.pomodoro_service import PomodoroService
from pomodoro_cli.ui.session_prompt import RichConfirmPrompt, RichInputPrompt
from pomodoro_cli.utils.ui.console import apply_output_settings


def build_service(
    console: Console,
    confirm_prompt: ConfirmPrompt | None = None,
    input_prompt: InputPrompt | None = None,
) -> PomodoroService:
    """Wire a PomodoroService from the current configuration."""
    config_service = get_config_service()
    config = config_service.config
    apply_output_settings(console, config.output.color)
    return PomodoroService(
        storage=JsonTaskStorage(config_service.get_tasks_file()),
        display=RichStatusBar(console, icons=config.output.icons),
        confirm_prompt=confirm_prompt or RichConfirmPrompt(console),
        input_prompt=input_prompt or RichInputPrompt(console),
        settings=config.pomodoro,
    )

