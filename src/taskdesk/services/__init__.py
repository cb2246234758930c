"""Service layer for taskdesk - business logic and backend selection."""

from .dispatcher import OperationDispatcher
from .task_service import TaskService

__all__ = [
    "TaskService",
    "OperationDispatcher",
]
