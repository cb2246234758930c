"""JSON snapshot file adapter."""

from .task_repository import JsonFileTaskRepository

__all__ = ["JsonFileTaskRepository"]
