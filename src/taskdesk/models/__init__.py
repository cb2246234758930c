"""taskdesk domain models.

Pydantic models for the task entity, the persisted collection, the operation
arguments and the operation result.
"""

from .core import (
    PRIORITIES,
    STATUSES,
    CreateTaskArgs,
    ListTasksArgs,
    OperationResult,
    Priority,
    SearchArgs,
    Status,
    Task,
    TaskIdArgs,
    TaskStorage,
    UpdateTaskArgs,
    describe_validation_error,
)
from .config_models import AppConfig, LoggingConfig, StorageConfig

__all__ = [
    # Task models
    "Task",
    "TaskStorage",
    "Priority",
    "Status",
    "PRIORITIES",
    "STATUSES",
    # Operation arguments
    "CreateTaskArgs",
    "ListTasksArgs",
    "UpdateTaskArgs",
    "TaskIdArgs",
    "SearchArgs",
    # Results
    "OperationResult",
    "describe_validation_error",
    # Configuration models
    "AppConfig",
    "StorageConfig",
    "LoggingConfig",
]
