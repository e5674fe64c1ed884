"""Focus interval building blocks: timer, break cycle and status display."""

from .cycling import BreakCycle, BreakKind, BreakPlan
from .timer import Timer

__all__ = ["BreakCycle", "BreakKind", "BreakPlan", "Timer"]
