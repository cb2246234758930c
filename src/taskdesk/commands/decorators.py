"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from taskdesk.exceptions import TaskdeskError
from taskdesk.ui.formatters import format_error
from taskdesk.utils.exit_codes import ERROR_GENERAL, get_exit_code_name
from taskdesk.utils.logger import get_logger


def command_wrapper(func: Callable):
    """Decorator to wrap command functions with common functionality.

    Runs coroutine commands with asyncio.run, logs timing and turns failures
    into a printed error plus a semantic exit code.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except TaskdeskError as e:
            elapsed = time.monotonic() - start
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except typer.Exit as e:
            # Explicit exits carry their own code
            if e.exit_code:
                logger.info("command exited: %s (%s)", cmd, get_exit_code_name(e.exit_code))
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
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
