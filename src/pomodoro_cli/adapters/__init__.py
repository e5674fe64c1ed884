"""Storage adapters."""

from .json_storage import JsonTaskStorage

__all__ = ["JsonTaskStorage"]
