"""Repository interfaces for taskdesk.

This package contains abstract base classes (ABCs) that define the contracts
for task persistence. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- taskdesk.adapters.json_file (snapshot file storage)
- taskdesk.adapters.sqlite (indexed table storage)
"""

from .repository import RowTaskRepository, TaskRepository

__all__ = [
    "TaskRepository",
    "RowTaskRepository",
]
