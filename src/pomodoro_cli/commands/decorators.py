"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from pomodoro_cli.models.exceptions import PomodoroError
from pomodoro_cli.ui.formatters import format_error
from pomodoro_cli.utils import exit_codes
from pomodoro_cli.utils.logger import get_logger


def command_wrapper(_func: Callable | None = None):
    """Wrap a command with timing logs and error-to-exit-code handling."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger("commands")
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                result = func(*args, **kwargs)
                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except PomodoroError as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) %s - %s",
                    cmd,
                    elapsed,
                    exit_codes.get_exit_code_name(e.exit_code),
                    str(e),
                )
                format_error(str(e))
                raise typer.Exit(code=e.exit_code) from e

            except (typer.Exit, typer.Abort):
                # --help, aborted prompts and explicit exits
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
