"""Database schema definitions for the SQLite task store.

Column names use the same camelCase spelling as the JSON document so rows
and serialized tasks map onto each other directly.
"""

from __future__ import annotations

CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT,
    priority TEXT NOT NULL CHECK(priority IN ('low', 'medium', 'high')),
    category TEXT,
    dueDate TEXT,
    status TEXT NOT NULL CHECK(status IN ('pending', 'in_progress', 'completed')),
    createdAt TEXT NOT NULL,
    completedAt TEXT
)
"""

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_priority ON tasks(priority)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_category ON tasks(category)",
]

TASK_COLUMNS = (
    "id",
    "title",
    "description",
    "priority",
    "category",
    "dueDate",
    "status",
    "createdAt",
    "completedAt",
)

UPSERT_TASK = (
    f"INSERT OR REPLACE INTO tasks ({', '.join(TASK_COLUMNS)}) "
    f"VALUES ({', '.join(':' + column for column in TASK_COLUMNS)})"
)


def initialize_schema(connection) -> None:
    """Create the tasks table and its indexes if they do not exist.

    Args:
        connection: sqlite3.Connection object
    """
    cursor = connection.cursor()
    cursor.execute(CREATE_TASKS_TABLE)
    for index_statement in CREATE_TASK_INDEXES:
        cursor.execute(index_statement)
    connection.commit()
