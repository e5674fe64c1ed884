"""Task data model and its focus-interval lifecycle."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from pomodoro_cli.models.exceptions import TaskStateError
from pomodoro_cli.models.focus.timer import ExpiryCallback, Timer

TimerFactory = Callable[..., Timer]


def _now() -> datetime:
    return datetime.now().astimezone()


class Task(BaseModel):
    """A queued unit of work.

    Attributes:
        name: What the task is about; fixed once created
        tags: Labels used for filtering finished tasks; fixed once created
        start_time: When focus on the task first began, None if never started
        is_completed: Whether the task has been marked done
        completed_at: When the task was marked done
        elapsed_seconds: Focus time already spent in the current interval
    """

    name: str = Field(frozen=True)
    tags: tuple[str, ...] = Field(default=(), frozen=True)
    start_time: datetime | None = None
    is_completed: bool = False
    completed_at: datetime | None = None
    elapsed_seconds: float = Field(default=0.0, ge=0)

    _timer: Timer | None = PrivateAttr(default=None)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name cannot be empty")
        return v.strip()

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        """Strip, drop empties and de-duplicate while keeping first-seen order."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        seen: dict[str, None] = {}
        for tag in v:
            tag = str(tag).strip().lstrip("@")
            if tag:
                seen.setdefault(tag, None)
        return tuple(seen)

    @property
    def is_in_progress(self) -> bool:
        return self.start_time is not None and not self.is_completed

    @property
    def timer(self) -> Timer | None:
        return self._timer

    def has_tag(self, tag: str) -> bool:
        return tag.lstrip("@") in self.tags

    def start_task(
        self,
        on_focus_end: ExpiryCallback,
        focus_duration: float,
        timer_factory: TimerFactory = Timer,
    ) -> Timer:
        """Start or resume the focus interval and return its timer.

        A frozen timer from an earlier pause is continued. Otherwise a new
        timer covers what is left of ``focus_duration`` after
        ``elapsed_seconds``; an interval that already ran out starts over.
        """
        if self.is_completed:
            raise TaskStateError(f"Task '{self.name}' is already completed")

        if self.start_time is None:
            self.start_time = _now()

        timer = self._timer
        if timer is None or timer.is_expired:
            if timer is not None or self.elapsed_seconds >= focus_duration:
                self.elapsed_seconds = 0.0
            timer = timer_factory(
                focus_duration,
                remaining_seconds=focus_duration - self.elapsed_seconds,
            )
            self._timer = timer

        timer.start(on_focus_end)
        return timer

    def pause_task(self) -> None:
        """Freeze the focus timer, keeping the time already spent."""
        if self._timer is None:
            return
        self._timer.stop()
        self.checkpoint()

    def checkpoint(self) -> None:
        """Copy the live timer's progress into ``elapsed_seconds``."""
        if self._timer is not None and not self._timer.is_expired:
            self.elapsed_seconds = self._timer.elapsed

    def complete_task(self) -> bool:
        """Mark the task done. Returns False if it already was."""
        if self.is_completed:
            return False
        if self._timer is not None:
            self._timer.reset()
            self._timer = None
        now = _now()
        if self.start_time is None:
            self.start_time = now
        self.is_completed = True
        self.completed_at = now
        return True

    def end_interval(self) -> None:
        """Forget the finished interval so the next start begins a fresh one."""
        if self._timer is not None:
            self._timer.reset()
            self._timer = None
        self.elapsed_seconds = 0.0
