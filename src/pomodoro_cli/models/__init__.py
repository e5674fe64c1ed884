"""Pomodoro CLI domain models.

Pydantic models for the task queue and the application configuration.
"""

from .config_models import AppConfig, OutputConfig, PomodoroSettings
from .exceptions import PomodoroError, StorageIOError, TaskStateError
from .task import Task

__all__ = [
    "AppConfig",
    "OutputConfig",
    "PomodoroError",
    "PomodoroSettings",
    "StorageIOError",
    "Task",
    "TaskStateError",
]
