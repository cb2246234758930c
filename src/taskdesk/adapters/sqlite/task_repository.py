"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import atexit
import sqlite3
from pathlib import Path

from taskdesk.adapters.sqlite.connection import open_connection
from taskdesk.adapters.sqlite.schema import UPSERT_TASK
from taskdesk.adapters.sqlite.utils import row_to_task, task_to_params
from taskdesk.models import Task, TaskStorage
from taskdesk.repositories import RowTaskRepository
from taskdesk.utils.dates import now


class SqliteTaskRepository(RowTaskRepository):
    """SQLite implementation of task repository.

    One row per task in the ``tasks`` table. ``save_all`` upserts every task
    it is given and never deletes rows; removals go through ``delete_one``.
    """

    def __init__(self, db_path: str | Path):
        """Initialize SQLite task repository.

        Args:
            db_path: Database file path. The connection is opened lazily.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def storage_type(self) -> str:
        return "database"

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = open_connection(self.db_path)
            atexit.register(self.close)
        return self._connection

    async def load_all(self) -> TaskStorage:
        """Load every row. ``last_updated`` is the time of the load."""
        cursor = self.connection.execute("SELECT * FROM tasks")
        tasks = [row_to_task(row) for row in cursor.fetchall()]
        return TaskStorage(tasks=tasks, last_updated=now())

    async def save_all(self, storage: TaskStorage) -> None:
        """Upsert every task in one transaction.

        Rows whose IDs are absent from ``storage`` are left untouched.
        """
        conn = self.connection
        try:
            conn.executemany(
                UPSERT_TASK, [task_to_params(task) for task in storage.tasks]
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    async def save_one(self, task: Task) -> None:
        """Insert or replace a single task."""
        conn = self.connection
        try:
            conn.execute(UPSERT_TASK, task_to_params(task))
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    async def delete_one(self, task_id: str) -> bool:
        """Delete a task by exact ID.

        Returns:
            True if a row was removed
        """
        conn = self.connection
        cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        conn.commit()
        return cursor.rowcount > 0

    def close(self) -> None:
        """Close the connection if open."""
        if self._connection is None:
            return
        connection = self._connection
        self._connection = None
        atexit.unregister(self.close)
        connection.close()
