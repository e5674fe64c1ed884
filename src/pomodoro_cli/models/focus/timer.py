"""Cancellable countdown used for focus intervals and breaks."""

from __future__ import annotations

import itertools
import threading
import time
from collections.abc import Callable
from typing import Protocol

ExpiryCallback = Callable[[int], None]

_timer_ids = itertools.count(1)


class ScheduledCall(Protocol):
    """The subset of ``threading.Timer`` a Timer relies on."""

    daemon: bool

    def start(self) -> None: ...

    def cancel(self) -> None: ...


Scheduler = Callable[..., ScheduledCall]


class Timer:
    """Countdown that fires ``on_expire(timer_id)`` once when it elapses.

    The countdown can be frozen with :meth:`stop` and continued with another
    :meth:`start`; :meth:`reset` discards the remaining time for good. Each
    start/stop/reset bumps an internal generation so an expiry that was
    already queued on the scheduler thread is dropped instead of firing late.
    """

    def __init__(
        self,
        duration_seconds: float,
        *,
        remaining_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        scheduler: Scheduler = threading.Timer,
    ):
        if duration_seconds <= 0:
            raise ValueError("duration_seconds must be greater than zero")

        self.timer_id = next(_timer_ids)
        self.duration_seconds = float(duration_seconds)
        if remaining_seconds is None:
            remaining_seconds = duration_seconds
        self._remaining = min(max(0.0, float(remaining_seconds)), self.duration_seconds)

        self._clock = clock
        self._scheduler = scheduler
        self._lock = threading.Lock()
        self._handle: ScheduledCall | None = None
        self._started_at: float | None = None
        self._generation = 0
        self._on_expire: ExpiryCallback | None = None

    def __repr__(self) -> str:
        state = "running" if self.is_running else "stopped"
        return f"<Timer #{self.timer_id} {state} remaining={self.remaining:.1f}s>"

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._handle is not None

    @property
    def remaining(self) -> float:
        """Seconds left on the countdown."""
        with self._lock:
            return self._remaining_locked(self._clock())

    @property
    def elapsed(self) -> float:
        """Seconds of the full duration already counted down."""
        return self.duration_seconds - self.remaining

    @property
    def is_expired(self) -> bool:
        """True once the countdown has run out or been reset."""
        with self._lock:
            return self._handle is None and self._remaining <= 0

    def start(self, on_expire: ExpiryCallback) -> bool:
        """Start or continue the countdown.

        Returns False without scheduling anything when already running.
        """
        with self._lock:
            if self._handle is not None:
                return False
            if self._remaining <= 0:
                raise RuntimeError(f"Timer #{self.timer_id} has no time remaining")

            self._generation += 1
            self._on_expire = on_expire
            self._started_at = self._clock()
            handle = self._scheduler(self._remaining, self._fire, args=(self._generation,))
            handle.daemon = True
            self._handle = handle
            handle.start()
            return True

    def stop(self) -> None:
        """Freeze the countdown, keeping the remaining time."""
        with self._lock:
            if self._handle is None:
                return
            self._remaining = self._remaining_locked(self._clock())
            self._cancel_locked()

    def reset(self) -> None:
        """Cancel any pending expiry and drop the remaining time."""
        with self._lock:
            self._cancel_locked()
            self._remaining = 0.0

    def _remaining_locked(self, now: float) -> float:
        if self._started_at is None:
            return self._remaining
        return max(0.0, self._remaining - (now - self._started_at))

    def _cancel_locked(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._started_at = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._handle is None:
                return
            self._handle = None
            self._started_at = None
            self._remaining = 0.0
            callback = self._on_expire

        if callback is not None:
            callback(self.timer_id)
