"""Pomodoro CLI - a task queue worked through in focus intervals and breaks."""

__version__ = "0.1.0"
