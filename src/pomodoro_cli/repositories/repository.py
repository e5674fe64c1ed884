"""Port definitions for Pomodoro CLI.

The session controller only talks to storage and to the user through these
abstract base classes (Ports & Adapters), so it can be driven in tests by
deterministic fakes and in the terminal by the Rich/prompt_toolkit adapters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pomodoro_cli.models.task import Task


class TaskStorage(ABC):
    """Persistence for the ordered task queue."""

    @abstractmethod
    def load(self) -> list[Task]:
        """Load the full task list, in queue order.

        Raises:
            StorageIOError: If the stored list cannot be read or parsed
        """
        raise NotImplementedError("TaskStorage.load() must be implemented by adapter")

    @abstractmethod
    def save(self, tasks: Sequence[Task]) -> None:
        """Persist the full task list, replacing whatever was stored before.

        Raises:
            StorageIOError: If the list cannot be written
        """
        raise NotImplementedError("TaskStorage.save() must be implemented by adapter")


class ConfirmPrompt(ABC):
    """Yes/no question put to the user."""

    @abstractmethod
    def ask(self, question: str) -> bool:
        """Block until the user answers; a dismissed prompt counts as no."""
        raise NotImplementedError("ConfirmPrompt.ask() must be implemented by adapter")


class InputPrompt(ABC):
    """Free-text question put to the user."""

    @abstractmethod
    def ask(self, title: str, placeholder: str) -> str:
        """Block until the user answers; a dismissed prompt returns ''."""
        raise NotImplementedError("InputPrompt.ask() must be implemented by adapter")


class StatusDisplay(ABC):
    """Fire-and-forget status output."""

    @abstractmethod
    def show_current_task(self, label: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_counts(self, completed: int, total: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_run_state(self, is_running: bool) -> None:
        raise NotImplementedError

    def show_error(self, message: str) -> None:
        """Report a failure that happened away from the command thread."""
