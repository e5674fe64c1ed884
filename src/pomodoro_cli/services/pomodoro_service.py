"""Pomodoro session controller.

PomodoroService owns the task queue and the single live timer and is the only
place where session state changes. It walks the queue one task at a time:

    idle --run--> focusing --timer expires, user answers--> on_break
      ^              |  ^                                     |
      |            pause run                                  |
      |              v  |                                     |
      |            paused --finish--> on_break                |
      +----------------- queue exhausted <---run on expiry----+

Timers fire on their own threads, so every transition runs under one
re-entrant lock. Timer callbacks carry the id of the timer that scheduled
them; an event whose timer is no longer the active one is dropped.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal

from pomodoro_cli.models.config_models import PomodoroSettings
from pomodoro_cli.models.exceptions import StorageIOError
from pomodoro_cli.models.focus.cycling import BreakCycle, BreakPlan
from pomodoro_cli.models.focus.timer import Timer
from pomodoro_cli.models.task import Task
from pomodoro_cli.repositories.repository import (
    ConfirmPrompt,
    InputPrompt,
    StatusDisplay,
    TaskStorage,
)
from pomodoro_cli.utils.logger import get_logger

SessionPhase = Literal["idle", "focusing", "on_break", "paused"]
TimerFactory = Callable[..., Timer]

COMPLETION_QUESTION = "Did you finish the task?"
ADD_TASK_TITLE = "Add a new task to the Pomodoro"
ADD_TASK_PLACEHOLDER = "task name"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the controller, for status output."""

    phase: SessionPhase
    current_task_index: int | None
    current_task_name: str | None
    completed_tasks: int
    total_tasks: int
    break_counter: int
    remaining_seconds: float | None
    queue_exhausted: bool


def parse_inline_tags(text: str) -> tuple[str, list[str]]:
    """Split ``"Write report @work @writing"`` into name and tags."""
    words = text.split()
    tags = [word[1:] for word in words if word.startswith("@") and len(word) > 1]
    name = " ".join(word for word in words if not (word.startswith("@") and len(word) > 1))
    return name, tags


class PomodoroService:
    """State machine orchestrating tasks, focus intervals and breaks."""

    def __init__(
        self,
        storage: TaskStorage,
        display: StatusDisplay,
        confirm_prompt: ConfirmPrompt,
        input_prompt: InputPrompt,
        settings: PomodoroSettings | None = None,
        timer_factory: TimerFactory = Timer,
    ):
        self.settings = settings or PomodoroSettings()
        self.tasks: list[Task] = []
        self.completed_tasks_counter = 0
        self.current_task_index: int | None = None
        self.phase: SessionPhase = "idle"

        self._storage = storage
        self._display = display
        self._confirm_prompt = confirm_prompt
        self._input_prompt = input_prompt
        self._timer_factory = timer_factory
        self._cycle = BreakCycle(
            counter_to_long_break=self.settings.counter_to_long_break,
            short_break=self.settings.break_duration,
            long_break=self.settings.long_break_duration,
        )
        self._timer: Timer | None = None
        self._active_task: Task | None = None
        self._lock = threading.RLock()
        self.logger = get_logger("pomodoro")

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def break_counter(self) -> int:
        return self._cycle.break_counter

    @property
    def break_progress(self) -> str:
        return self._cycle.get_progress_dots()

    @property
    def active_timer(self) -> Timer | None:
        return self._timer

    @property
    def queue_exhausted(self) -> bool:
        """True when the index has moved past the last task."""
        return self.current_task_index is not None and self.current_task_index >= len(
            self.tasks
        )

    @property
    def current_task(self) -> Task | None:
        if self.current_task_index is None or self.queue_exhausted:
            return None
        return self.tasks[self.current_task_index]

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            task = self._active_task or self.current_task
            return SessionSnapshot(
                phase=self.phase,
                current_task_index=self.current_task_index,
                current_task_name=task.name if task else None,
                completed_tasks=self.completed_tasks_counter,
                total_tasks=len(self.tasks),
                break_counter=self.break_counter,
                remaining_seconds=self._timer.remaining if self._timer else None,
                queue_exhausted=self.queue_exhausted,
            )

    def get_finished_tasks(self, tag: str | None = None) -> list[Task]:
        with self._lock:
            finished = [task for task in self.tasks if task.is_completed]
        if tag:
            return [task for task in finished if task.has_tag(tag)]
        return finished

    def get_finished_tasks_count(self, tag: str | None = None) -> int:
        return len(self.get_finished_tasks(tag))

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Restore the queue and counters from storage without starting anything."""
        with self._lock:
            self.tasks = self._storage.load()
            self.completed_tasks_counter = 0
            self.current_task_index = None

            for index, task in enumerate(self.tasks):
                if task.start_time is None:
                    break
                if task.is_completed:
                    self.completed_tasks_counter += 1
                else:
                    self.current_task_index = index

            self.logger.info(
                "Loaded %d task(s), %d completed, current index %s",
                len(self.tasks),
                self.completed_tasks_counter,
                self.current_task_index,
            )

    def preload(self) -> None:
        """Restore the queue from storage and resume an interrupted task."""
        with self._lock:
            self.load()
            task = self.current_task
            if task is not None and task.is_in_progress:
                self.logger.info("Resuming interrupted task '%s'", task.name)
                self.run()

            self._show_counts()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_task(
        self, name: str | None = None, tags: Sequence[str] = ()
    ) -> Task | None:
        """Append a task to the queue, asking for a name when none is given.

        Returns the new task, or None when the prompt was dismissed or left
        empty.
        """
        if not name:
            name = self._input_prompt.ask(ADD_TASK_TITLE, ADD_TASK_PLACEHOLDER)

        name, inline_tags = parse_inline_tags(name or "")
        if not name:
            self.logger.debug("Add task cancelled: empty name")
            return None

        task = Task(name=name, tags=[*tags, *inline_tags])
        with self._lock:
            self.tasks.append(task)
            try:
                self._persist()
            except StorageIOError:
                self.tasks.pop()
                raise
            self.logger.info("Added task '%s' tags=%s", task.name, list(task.tags))
            self._show_counts()
        return task

    def run(self) -> None:
        """Start or resume focus on the next unfinished task.

        If the progress cannot be saved the session is put back the way it
        was and the StorageIOError is raised.
        """
        with self._lock:
            if self.phase == "focusing":
                self.logger.debug("run ignored: already focusing")
                return
            break_timer = self._timer if self.phase == "on_break" else None
            previous = (self.phase, self._timer, self._active_task, self.current_task_index)

            self.pick_task()
            task = self.current_task
            if task is None:
                if break_timer is not None:
                    break_timer.reset()
                self.logger.info("Nothing to run: queue empty or exhausted")
                self._go_idle()
                return

            start_time, elapsed = task.start_time, task.elapsed_seconds
            self._active_task = task
            self._timer = task.start_task(
                self._on_focus_timer_expired,
                self.settings.focus_duration,
                self._timer_factory,
            )
            self.phase = "focusing"
            try:
                self._persist()
            except StorageIOError:
                task.pause_task()
                task.start_time, task.elapsed_seconds = start_time, elapsed
                self.phase, self._timer, self._active_task, self.current_task_index = previous
                raise

            if break_timer is not None:
                self.logger.info("Skipping the rest of the break")
                break_timer.reset()
            self.logger.info(
                "Focusing on '%s' (index %d, %.0fs left)",
                task.name,
                self.current_task_index,
                self._timer.remaining,
            )
            self._display.show_current_task(f"Focus: {task.name}")
            self._display.show_run_state(True)

    def pause(self) -> None:
        """Freeze the running focus interval."""
        with self._lock:
            if self.phase != "focusing" or self._active_task is None:
                self.logger.debug("pause ignored in phase %s", self.phase)
                return

            task = self._active_task
            # Persist first; a failed save leaves the task focusing.
            self._persist()
            if self._timer is not None:
                self._timer.stop()
            task.pause_task()
            self.phase = "paused"
            self.logger.info("Paused '%s' after %.0fs", task.name, task.elapsed_seconds)
            self._display.show_run_state(False)

    def stop_task(self) -> None:
        """Finish the current task now, skipping the confirmation question."""
        with self._lock:
            if self.phase not in ("focusing", "paused") or self._active_task is None:
                self.logger.debug("finish ignored in phase %s", self.phase)
                return

            if self._timer is not None:
                self._timer.reset()
            self.finish_task(self._active_task)
            self._persist()
            self.take_break()

    def clear_completed(self) -> None:
        """Drop every completed task and start picking from the head again."""
        with self._lock:
            previous = (self.tasks, self.completed_tasks_counter, self.current_task_index)
            self.tasks = [task for task in self.tasks if not task.is_completed]
            self.completed_tasks_counter = 0
            self.current_task_index = None
            try:
                self._persist()
            except StorageIOError:
                self.tasks, self.completed_tasks_counter, self.current_task_index = previous
                raise
            self.logger.info("Cleared %d completed task(s)", len(previous[0]) - len(self.tasks))
            self._show_counts()

    def shutdown(self) -> None:
        """Cancel the live timer and save progress, leaving tasks resumable.

        The session ends idle, so a completion answer still in flight is
        discarded.
        """
        with self._lock:
            if self._active_task is not None:
                self._active_task.pause_task()
            if self._timer is not None:
                self._timer.stop()
            self.logger.info("Session shut down in phase %s", self.phase)
            self._active_task = None
            self._timer = None
            self.phase = "idle"
            self._persist()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def pick_task(self) -> None:
        """Choose the task to work on, never moving backwards.

        An unset index starts at the head of the queue; completed tasks at the
        index are passed over. An unfinished task at the index is kept, which
        is how a paused task gets resumed.
        """
        with self._lock:
            if not self.tasks:
                return
            if self.current_task_index is None:
                self.current_task_index = 0
            while self.current_task is not None and self.current_task.is_completed:
                self.current_task_index += 1

    def finish_task(self, task: Task) -> None:
        """The single completion path; counts each task once."""
        with self._lock:
            if not task.complete_task():
                return
            if any(t is task for t in self.tasks):
                self.completed_tasks_counter += 1
            self.logger.info("Completed '%s'", task.name)
            self._show_counts()
            self._persist()

    def take_break(self) -> BreakPlan:
        """Start a short or long break; when it ends focus resumes."""
        with self._lock:
            if self._active_task is not None and not self._active_task.is_completed:
                self._active_task.end_interval()
            self._active_task = None

            plan = self._cycle.next_break()
            timer = self._timer_factory(plan.duration_seconds)
            self._timer = timer
            self.phase = "on_break"
            timer.start(self._on_break_timer_expired)
            self.logger.info(
                "%s for %.0fs (break counter %d)",
                plan.label,
                plan.duration_seconds,
                self.break_counter,
            )
            self._display.show_current_task(f"{plan.label} {plan.get_emoji()}")
            self._display.show_run_state(True)
            return plan

    def resolve_focus_end(self, timer_id: int, task: Task, finished: bool) -> bool:
        """Apply the user's answer to "did you finish?" for one focus interval.

        Returns False when the interval was superseded while the question was
        open (paused, finished manually, or replaced), in which case nothing
        changes.
        """
        with self._lock:
            if not self._is_active_timer(timer_id) or self.phase != "focusing":
                self.logger.debug("Discarding stale focus answer for timer #%d", timer_id)
                return False
            if self._active_task is not task:
                self.logger.debug("Discarding focus answer for a different task")
                return False

            if finished:
                self.finish_task(task)
            self.take_break()
            return True

    # ------------------------------------------------------------------
    # Timer callbacks (run on timer threads)
    # ------------------------------------------------------------------

    def _on_focus_timer_expired(self, timer_id: int) -> None:
        with self._lock:
            if not self._is_active_timer(timer_id) or self.phase != "focusing":
                self.logger.debug("Ignoring stale focus expiry for timer #%d", timer_id)
                return
            task = self._active_task
            self.logger.info("Focus interval on '%s' ended", task.name if task else "?")
            self._display.show_run_state(False)

        if task is None:
            return

        # The question is asked without holding the lock so pause/finish stay
        # usable while it is open.
        finished = self._confirm_prompt.ask(COMPLETION_QUESTION)
        self._guarded(lambda: self.resolve_focus_end(timer_id, task, finished))

    def _on_break_timer_expired(self, timer_id: int) -> None:
        with self._lock:
            if not self._is_active_timer(timer_id) or self.phase != "on_break":
                self.logger.debug("Ignoring stale break expiry for timer #%d", timer_id)
                return
            self.logger.info("Break over")
            self._timer = None
            self.phase = "idle"
            self._guarded(self.run)

    def _guarded(self, action: Callable[[], object]) -> None:
        """Run a transition from a timer thread, reporting instead of raising."""
        try:
            action()
        except StorageIOError as e:
            self.logger.error("Transition failed on timer thread: %s", e)
            self._display.show_error(str(e))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_active_timer(self, timer_id: int) -> bool:
        return self._timer is not None and self._timer.timer_id == timer_id

    def _go_idle(self) -> None:
        self._active_task = None
        self._timer = None
        self.phase = "idle"
        self._display.show_current_task("No task")
        self._display.show_run_state(False)

    def _show_counts(self) -> None:
        self._display.show_counts(self.completed_tasks_counter, len(self.tasks))

    def _persist(self) -> None:
        if self._active_task is not None and self.phase == "focusing":
            self._active_task.checkpoint()
        self._storage.save(self.tasks)
