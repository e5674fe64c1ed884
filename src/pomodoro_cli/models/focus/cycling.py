"""Short/long break cycling."""

from dataclasses import dataclass
from typing import Literal

BreakKind = Literal["short_break", "long_break"]


@dataclass(frozen=True)
class BreakPlan:
    """The break chosen after a focus interval."""

    kind: BreakKind
    duration_seconds: float

    @property
    def label(self) -> str:
        return "Long break" if self.kind == "long_break" else "Break"

    def get_emoji(self) -> str:
        return "🌴" if self.kind == "long_break" else "☕"


@dataclass
class BreakCycle:
    """Counts short breaks and decides when the long break is due.

    A long break follows ``counter_to_long_break`` short breaks, after which
    the count starts again from zero.
    """

    counter_to_long_break: int = 4
    short_break: float = 300
    long_break: float = 900
    break_counter: int = 0

    def __post_init__(self) -> None:
        if self.counter_to_long_break < 1:
            raise ValueError("counter_to_long_break must be at least 1")

    def next_kind(self) -> BreakKind:
        """Kind of the next break, without advancing the cycle."""
        if self.break_counter < self.counter_to_long_break:
            return "short_break"
        return "long_break"

    def next_break(self) -> BreakPlan:
        """Advance the cycle and return the break to take now."""
        if self.next_kind() == "short_break":
            self.break_counter += 1
            return BreakPlan("short_break", self.short_break)

        self.break_counter = 0
        return BreakPlan("long_break", self.long_break)

    def get_progress_dots(self) -> str:
        """Progress dots showing how far the cycle is from the long break."""
        dots = []
        for i in range(1, self.counter_to_long_break + 1):
            dots.append("●" if i <= self.break_counter else "○")
        return " ".join(dots)
