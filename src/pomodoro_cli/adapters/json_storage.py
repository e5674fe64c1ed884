"""JSON file storage for the task queue."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from pomodoro_cli.models.exceptions import StorageIOError
from pomodoro_cli.models.task import Task
from pomodoro_cli.repositories.repository import TaskStorage
from pomodoro_cli.utils.logger import get_logger

_TASK_LIST = TypeAdapter(list[Task])


class JsonTaskStorage(TaskStorage):
    """Stores the whole queue as a JSON array, one object per task.

    A missing file is an empty queue. Writes go to a temporary file in the
    same directory which then replaces the target, so a failed write never
    leaves a truncated list behind.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self.logger = get_logger("storage")

    def load(self) -> list[Task]:
        if not self.path.exists():
            self.logger.debug("No task file at %s, starting with an empty queue", self.path)
            return []

        try:
            raw = self.path.read_text(encoding="utf-8")
            tasks = _TASK_LIST.validate_json(raw) if raw.strip() else []
        except (OSError, ValidationError) as e:
            self.logger.error("Failed to load tasks from %s: %s", self.path, e)
            raise StorageIOError(f"Failed to load tasks from {self.path}: {e}") from e

        self.logger.debug("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        payload = _TASK_LIST.dump_json(list(tasks), indent=2)
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            self.logger.error("Failed to save tasks to %s: %s", self.path, e)
            raise StorageIOError(f"Failed to save tasks to {self.path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        self.logger.debug("Saved %d task(s) to %s", len(tasks), self.path)
