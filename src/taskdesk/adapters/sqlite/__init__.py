"""SQLite indexed table adapter."""

from .task_repository import SqliteTaskRepository

__all__ = ["SqliteTaskRepository"]
