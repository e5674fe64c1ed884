"""Custom exceptions for Pomodoro CLI."""

from pomodoro_cli.utils import exit_codes


class PomodoroError(Exception):
    """Base exception for all Pomodoro CLI errors.

    ``exit_code`` is what a command exits with when the error reaches it.
    """

    exit_code = exit_codes.ERROR_GENERAL


class StorageIOError(PomodoroError):
    """Raised when the task list cannot be loaded from or saved to disk."""

    exit_code = exit_codes.ERROR_STORAGE


class TaskStateError(PomodoroError):
    """Raised when a task operation is invalid for the task's current state."""
