"""
Strategy Pattern: Storage Strategy Container

This module implements the Strategy Pattern for storage backend selection.
Instead of branching on the backend at every call site, a StorageStrategyContext
holds the strategy chosen at startup and is injected into services.

The context also covers the gap between backends: operations that only
row-oriented backends provide (single-task save/delete, close) are detected at
runtime and emulated on top of the whole-collection contract where missing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from taskdesk.models.core import Task, TaskStorage
from taskdesk.repositories import TaskRepository

FILE_STORAGE = "file"
DATABASE_STORAGE = "database"

JSON_FILE_NAME = "tasks.json"
DB_FILE_NAME = "tasks.db"

_DATABASE_ALIASES = {"database", "db"}


def normalize_storage_type(value: str | None) -> str:
    """Map a configured storage type onto a known backend.

    ``database`` and ``db`` (any case) select the database backend; anything
    else, including an empty value, selects the file backend.
    """
    if value and value.strip().lower() in _DATABASE_ALIASES:
        return DATABASE_STORAGE
    return FILE_STORAGE


class StorageStrategy(ABC):
    """
    Abstract base class for storage strategies.

    A strategy encapsulates the repository implementation for a given storage
    backend (JSON snapshot file or SQLite table).
    """

    @abstractmethod
    def get_task_repository(self) -> TaskRepository:
        """Get task repository implementation for this strategy."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""

    @property
    @abstractmethod
    def location(self) -> Path:
        """Get the path of the underlying file."""


class FileStorageStrategy(StorageStrategy):
    """
    JSON snapshot storage strategy.

    The whole collection lives in ``<data_dir>/tasks.json``.
    """

    def __init__(self, data_dir: str | Path):
        # Import here to avoid circular dependencies
        from taskdesk.adapters.json_file import JsonFileTaskRepository

        self._path = Path(data_dir) / JSON_FILE_NAME
        self._task_repo = JsonFileTaskRepository(self._path)

    def get_task_repository(self) -> TaskRepository:
        return self._task_repo

    @property
    def storage_type(self) -> str:
        return FILE_STORAGE

    @property
    def location(self) -> Path:
        return self._path


class DatabaseStorageStrategy(StorageStrategy):
    """
    SQLite storage strategy.

    One row per task in ``<data_dir>/tasks.db``.
    """

    def __init__(self, data_dir: str | Path):
        from taskdesk.adapters.sqlite import SqliteTaskRepository

        self._path = Path(data_dir) / DB_FILE_NAME
        self._task_repo = SqliteTaskRepository(db_path=self._path)

    def get_task_repository(self) -> TaskRepository:
        return self._task_repo

    @property
    def storage_type(self) -> str:
        return DATABASE_STORAGE

    @property
    def location(self) -> Path:
        return self._path


def create_storage_strategy(storage_type: str | None, data_dir: str | Path) -> StorageStrategy:
    """Build the strategy for a configured storage type.

    Args:
        storage_type: Raw configured value, see normalize_storage_type()
        data_dir: Directory holding the task store

    Returns:
        FileStorageStrategy or DatabaseStorageStrategy
    """
    if normalize_storage_type(storage_type) == DATABASE_STORAGE:
        return DatabaseStorageStrategy(data_dir)
    return FileStorageStrategy(data_dir)


class StorageStrategyContext:
    """
    Strategy context giving uniform access to the active storage backend.

    This is the single source of truth for storage access throughout the
    application. It's created once at startup and injected into services.

    Usage:
        # At startup
        context = StorageStrategyContext(FileStorageStrategy("/path/to/data"))

        # In services
        storage = await context.load_tasks()
        await context.save_tasks(storage)  # Works regardless of strategy
    """

    def __init__(self, strategy: StorageStrategy):
        """
        Initialize strategy context.

        Args:
            strategy: Storage strategy (file or database)
        """
        self._strategy = strategy

    @property
    def task_repository(self) -> TaskRepository:
        """Get task repository from current strategy."""
        return self._strategy.get_task_repository()

    @property
    def storage_type(self) -> str:
        """Get storage type (for logging/debugging only)."""
        return self._strategy.storage_type

    @property
    def location(self) -> Path:
        return self._strategy.location

    @property
    def strategy(self) -> StorageStrategy:
        """Get underlying strategy (for advanced use cases)."""
        return self._strategy

    def supports(self, capability: str) -> bool:
        """Check whether the active backend implements an optional operation.

        Args:
            capability: Method name, e.g. ``"delete_one"``

        Returns:
            True if the backend exposes a callable with that name
        """
        return callable(getattr(self.task_repository, capability, None))

    async def load_tasks(self) -> TaskStorage:
        return await self.task_repository.load_all()

    async def save_tasks(self, storage: TaskStorage) -> None:
        await self.task_repository.save_all(storage)

    async def save_task(self, task: Task) -> None:
        """Persist a single task, natively or via load/replace/save-all."""
        if self.supports("save_one"):
            await self.task_repository.save_one(task)
            return

        storage = await self.load_tasks()
        for index, existing in enumerate(storage.tasks):
            if existing.id == task.id:
                storage.tasks[index] = task
                break
        else:
            storage.tasks.append(task)
        await self.save_tasks(storage)

    async def delete_task(self, task_id: str) -> bool:
        """Delete a single task by exact ID, natively or via load/filter/save-all.

        Returns:
            True if a task was removed
        """
        if self.supports("delete_one"):
            return await self.task_repository.delete_one(task_id)

        storage = await self.load_tasks()
        remaining = [task for task in storage.tasks if task.id != task_id]
        if len(remaining) == len(storage.tasks):
            return False
        storage.tasks = remaining
        await self.save_tasks(storage)
        return True

    def close(self) -> None:
        """Release backend resources; a no-op for backends without any."""
        if self.supports("close"):
            self.task_repository.close()
