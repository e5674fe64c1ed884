"""Collaborator interfaces consumed by the session controller."""

from .repository import ConfirmPrompt, InputPrompt, StatusDisplay, TaskStorage

__all__ = ["ConfirmPrompt", "InputPrompt", "StatusDisplay", "TaskStorage"]
