"""Database connection setup for the SQLite task store."""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from taskdesk.adapters.sqlite.schema import initialize_schema


def open_connection(db_path: str | Path) -> sqlite3.Connection:
    """Open and configure a connection to the task database.

    Provides:
    - Automatic directory creation
    - WAL mode for better concurrency
    - Dict-like row access
    - Owner-only file permissions for newly created databases
    - Schema creation on first use

    Args:
        db_path: Path to database file, or ``":memory:"``

    Returns:
        sqlite3.Connection configured for taskdesk usage
    """
    in_memory = str(db_path) == ":memory:"
    is_new_database = False
    if not in_memory:
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

    connection = sqlite3.connect(
        str(db_path),
        check_same_thread=False,
        timeout=30.0,  # Wait up to 30s for locks
    )
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA journal_mode = WAL")

    if is_new_database:
        os.chmod(db_path, 0o600)

    initialize_schema(connection)
    return connection
