"""Decorators for task operations."""

import functools
import time
import traceback
from collections.abc import Awaitable, Callable

from pydantic import ValidationError

from taskdesk.models import OperationResult, describe_validation_error
from taskdesk.utils.logger import get_logger


def operation_wrapper(func: Callable[..., Awaitable[OperationResult]]):
    """Wrap an async operation with logging and the error policy.

    Argument validation failures become a validation-error result listing
    every violated constraint. Any other exception becomes a generic error
    result. Neither propagates to the caller.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> OperationResult:
        logger = get_logger("operations")
        op = func.__name__
        start = time.monotonic()
        logger.info("operation started: %s", op)
        try:
            result = await func(*args, **kwargs)

        except ValidationError as e:
            elapsed = time.monotonic() - start
            messages = describe_validation_error(e)
            logger.warning(
                "operation rejected: %s (%.3fs) - %s",
                op,
                elapsed,
                "; ".join(messages),
            )
            return OperationResult.validation_error(messages)

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "operation failed: %s (%.3fs) - %s\n%s",
                op,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            return OperationResult.error(str(e))

        elapsed = time.monotonic() - start
        logger.info("operation completed: %s (%.3fs) -> %s", op, elapsed, result.kind)
        return result

    return wrapper
