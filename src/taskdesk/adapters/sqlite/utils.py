"""Utility functions for SQLite adapter."""

from __future__ import annotations

import sqlite3
from typing import Any

from pydantic import ValidationError

from taskdesk.adapters.sqlite.schema import TASK_COLUMNS
from taskdesk.exceptions import StorageError
from taskdesk.models import Task


def row_to_task(row: sqlite3.Row) -> Task:
    """Convert a tasks row to a Task.

    Values are taken as stored; only the column types are checked.

    Args:
        row: sqlite3.Row from the tasks table

    Returns:
        Task built from the row

    Raises:
        StorageError: If the row cannot be decoded (e.g. an unparseable
            ``createdAt``)
    """
    try:
        return Task.model_validate(dict(row))
    except ValidationError as e:
        raise StorageError(f"Malformed task row {row['id']!r}: {e}") from e


def task_to_params(task: Task) -> dict[str, Any]:
    """Convert a Task to named parameters for the upsert statement.

    Absent optional fields become NULL.
    """
    data = task.model_dump(mode="json", by_alias=True)
    return {column: data.get(column) for column in TASK_COLUMNS}
