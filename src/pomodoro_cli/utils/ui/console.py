"""Shared Rich console."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Console shared by every command, so styles and width stay consistent."""
    return Console(highlight=highlight)


def apply_output_settings(console: Console, color: bool) -> Console:
    """Honour the ``output.color`` setting on an existing console."""
    console.no_color = not color
    return console
