"""Repository abstraction layer for taskdesk.

This module defines the abstract base classes (interfaces) for task storage
backends, following the hexagonal architecture (Ports & Adapters) pattern.

Every backend can load and save the whole task collection. Row-oriented
backends additionally expose single-task writes, single-task deletes and an
explicit close; callers detect those capabilities at runtime rather than
assuming them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskdesk.models import Task, TaskStorage


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    This interface defines the whole-collection contract that every storage
    backend (JSON snapshot file, SQLite table) implements.
    """

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""

    @abstractmethod
    async def load_all(self) -> TaskStorage:
        """Load the full task collection.

        Returns:
            TaskStorage holding every persisted task

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskRepository.load_all() must be implemented by adapter"
        )

    @abstractmethod
    async def save_all(self, storage: TaskStorage) -> None:
        """Persist the full task collection.

        Args:
            storage: Collection to persist

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskRepository.save_all() must be implemented by adapter"
        )


class RowTaskRepository(TaskRepository):
    """Task repository that can also address individual rows."""

    @abstractmethod
    async def save_one(self, task: Task) -> None:
        """Insert or replace a single task.

        Args:
            task: Task to persist

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "RowTaskRepository.save_one() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_one(self, task_id: str) -> bool:
        """Delete a single task by exact ID.

        Args:
            task_id: Full task ID

        Returns:
            True if a task was deleted, False if none existed

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "RowTaskRepository.delete_one() must be implemented by adapter"
        )

    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection. Safe to call more than once."""
