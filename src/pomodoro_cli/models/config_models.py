"""Configuration models for Pomodoro CLI."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class PomodoroSettings(BaseModel):
    """Durations (in seconds) and storage location for the session controller."""

    tasks_file: str | None = Field(
        default=None,
        description="Task list location; defaults to tasks.json in the user data dir",
    )
    focus_duration: float = Field(default=25 * 60, gt=0)
    break_duration: float = Field(default=5 * 60, gt=0)
    long_break_duration: float = Field(default=15 * 60, gt=0)
    counter_to_long_break: int = Field(default=4, ge=1)

    @field_validator("tasks_file")
    @classmethod
    def validate_tasks_file(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not v.strip():
            raise ValueError("tasks_file cannot be empty")
        return v.strip()


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True)
    icons: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main Pomodoro CLI configuration."""

    pomodoro: PomodoroSettings = Field(default_factory=PomodoroSettings)
    output: OutputConfig = Field(default_factory=OutputConfig)
