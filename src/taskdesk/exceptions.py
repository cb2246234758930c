"""Custom exceptions for taskdesk."""

from taskdesk.utils.exit_codes import ERROR_GENERAL, ERROR_INVALID_ARGS


class TaskdeskError(Exception):
    """Base exception for all taskdesk errors, carrying a CLI exit code."""

    exit_code = ERROR_GENERAL


class UnknownOperationError(TaskdeskError):
    """Raised when an operation name is not one the dispatcher knows."""

    exit_code = ERROR_INVALID_ARGS


class UnknownResourceError(TaskdeskError):
    """Raised when a resource URI is not one the dispatcher serves."""

    exit_code = ERROR_INVALID_ARGS


class StorageError(TaskdeskError):
    """Raised when stored task data cannot be decoded into tasks."""
