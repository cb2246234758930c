"""JSON snapshot file implementation of TaskRepository."""

from __future__ import annotations

import json
from pathlib import Path

from taskdesk.models import TaskStorage
from taskdesk.repositories import TaskRepository
from taskdesk.utils.dates import now
from taskdesk.utils.logger import get_logger


class JsonFileTaskRepository(TaskRepository):
    """Stores the whole task collection as one pretty-printed JSON document.

    The document has the shape ``{"tasks": [...], "lastUpdated": "..."}``.
    Every save rewrites the whole file.
    """

    def __init__(self, file_path: str | Path):
        """Initialize the repository.

        Args:
            file_path: Path of the JSON document. Parent directories are
                created on first save.
        """
        self.file_path = Path(file_path)

    @property
    def storage_type(self) -> str:
        return "file"

    async def load_all(self) -> TaskStorage:
        """Load the collection from disk.

        A missing file yields an empty collection. Stored tasks are taken as
        they are, so a hand-edited task that breaks an input rule still loads.
        Unreadable or malformed files are logged and treated as empty.
        """
        if not self.file_path.exists():
            return TaskStorage(last_updated=now())

        try:
            document = json.loads(self.file_path.read_text(encoding="utf-8"))
            if isinstance(document, dict):
                document.setdefault("lastUpdated", now())
            return TaskStorage.model_validate(document)
        except (OSError, ValueError):
            get_logger("storage.json").exception(
                "Failed to load tasks from %s", self.file_path
            )
            return TaskStorage(last_updated=now())

    async def save_all(self, storage: TaskStorage) -> None:
        """Stamp ``last_updated`` and overwrite the document.

        Raises:
            OSError: If the directory or file cannot be written
        """
        storage.last_updated = now()
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self.file_path.write_text(storage.to_json(), encoding="utf-8")
