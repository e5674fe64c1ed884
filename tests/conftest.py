"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and to
drive timers deterministically: a fake clock plus a fake scheduler whose
pending calls are fired by hand instead of on background threads.
"""

from __future__ import annotations

import logging
from functools import partial
from unittest.mock import patch

import pytest

from pomodoro_cli.models.config_models import PomodoroSettings
from pomodoro_cli.models.exceptions import StorageIOError
from pomodoro_cli.models.focus.timer import Timer
from pomodoro_cli.models.task import Task
from pomodoro_cli.repositories.repository import (
    ConfirmPrompt,
    InputPrompt,
    StatusDisplay,
    TaskStorage,
)
from pomodoro_cli.services.pomodoro_service import PomodoroService

# ---------------------------------------------------------------------------
# Timer fakes
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeHandle:
    """Stand-in for a started ``threading.Timer``."""

    def __init__(self, interval, function, args=()):
        self.interval = interval
        self.function = function
        self.args = tuple(args)
        self.daemon = False
        self.started = False
        self.cancelled = False
        self.fired = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return self.started and not self.cancelled and not self.fired

    def fire(self) -> None:
        """Deliver the expiry, even if the handle was cancelled meanwhile."""
        self.fired = True
        self.function(*self.args)


class FakeScheduler:
    """Records every scheduled call; tests fire them explicitly."""

    def __init__(self):
        self.handles: list[FakeHandle] = []

    def __call__(self, interval, function, args=()):
        handle = FakeHandle(interval, function, args)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if h.pending]

    def fire(self) -> FakeHandle:
        """Fire the most recently scheduled pending call."""
        pending = self.pending
        assert pending, "no pending timer to fire"
        handle = pending[-1]
        handle.fire()
        return handle


# ---------------------------------------------------------------------------
# Port fakes
# ---------------------------------------------------------------------------


class MemoryStorage(TaskStorage):
    """Keeps the queue as plain dicts, the way it would be written to disk."""

    def __init__(self, tasks: list[Task] | None = None):
        self.saved: list[dict] = [t.model_dump() for t in tasks or []]
        self.save_count = 0
        self.fail_saves = False
        self.fail_loads = False

    def seed(self, tasks: list[Task]) -> None:
        self.saved = [t.model_dump() for t in tasks]

    def load(self) -> list[Task]:
        if self.fail_loads:
            raise StorageIOError("disk unreadable")
        return [Task.model_validate(data) for data in self.saved]

    def save(self, tasks) -> None:
        if self.fail_saves:
            raise StorageIOError("disk full")
        self.saved = [t.model_dump() for t in tasks]
        self.save_count += 1


class RecordingDisplay(StatusDisplay):
    def __init__(self):
        self.labels: list[str] = []
        self.counts: list[tuple[int, int]] = []
        self.run_states: list[bool] = []
        self.errors: list[str] = []

    def show_current_task(self, label: str) -> None:
        self.labels.append(label)

    def show_counts(self, completed: int, total: int) -> None:
        self.counts.append((completed, total))

    def show_run_state(self, is_running: bool) -> None:
        self.run_states.append(is_running)

    def show_error(self, message: str) -> None:
        self.errors.append(message)


class ScriptedConfirm(ConfirmPrompt):
    """Answers questions from a script; ``on_ask`` runs before answering."""

    def __init__(self, answers: list[bool] | None = None, default: bool = True):
        self.answers = list(answers or [])
        self.default = default
        self.questions: list[str] = []
        self.on_ask = None

    def ask(self, question: str) -> bool:
        self.questions.append(question)
        if self.on_ask is not None:
            self.on_ask()
        return self.answers.pop(0) if self.answers else self.default


class ScriptedInput(InputPrompt):
    def __init__(self, answers: list[str] | None = None):
        self.answers = list(answers or [])
        self.asked: list[tuple[str, str]] = []

    def ask(self, title: str, placeholder: str) -> str:
        self.asked.append((title, placeholder))
        return self.answers.pop(0) if self.answers else ""


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


def _drop_log_handlers() -> None:
    app_logger = logging.getLogger("pomodoro_cli")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path):
    """Send the rotating log file to a per-test directory."""
    from pomodoro_cli.utils import logger as logger_module

    log_dir = tmp_path / "logs"
    _drop_log_handlers()
    logger_module._logger = None
    with patch("pomodoro_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir
    _drop_log_handlers()
    logger_module._logger = None


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from pomodoro_cli.services.config_service import get_config_service

    tmpdir = str(tmp_path / "home")
    get_config_service.cache_clear()
    with patch("pomodoro_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("pomodoro_cli.services.config_service.user_data_dir", return_value=tmpdir):
            from pomodoro_cli.services.config_service import ConfigService

            svc = ConfigService()
            yield svc
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Session controller wiring
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def scheduler():
    return FakeScheduler()


@pytest.fixture()
def timer_factory(clock, scheduler):
    return partial(Timer, clock=clock, scheduler=scheduler)


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def display():
    return RecordingDisplay()


@pytest.fixture()
def confirm():
    return ScriptedConfirm()


@pytest.fixture()
def input_prompt():
    return ScriptedInput()


@pytest.fixture()
def settings():
    """Short durations and a long break after two short ones."""
    return PomodoroSettings(
        focus_duration=60,
        break_duration=10,
        long_break_duration=30,
        counter_to_long_break=2,
    )


@pytest.fixture()
def service(storage, display, confirm, input_prompt, settings, timer_factory):
    return PomodoroService(
        storage=storage,
        display=display,
        confirm_prompt=confirm,
        input_prompt=input_prompt,
        settings=settings,
        timer_factory=timer_factory,
    )
