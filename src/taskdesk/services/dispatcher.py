"""Operation dispatcher.

Maps operation names, as a protocol transport would receive them, onto the
TaskService, and serves the read-only task listing resource. This is the
seam a transport adapter plugs into.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel

from taskdesk.exceptions import UnknownOperationError, UnknownResourceError
from taskdesk.models import (
    CreateTaskArgs,
    ListTasksArgs,
    OperationResult,
    SearchArgs,
    TaskIdArgs,
    UpdateTaskArgs,
)
from taskdesk.services.task_service import TaskService

TASKS_RESOURCE_URI = "tasks://list"

# name -> (description, argument model or None)
OPERATIONS: dict[str, tuple[str, type[BaseModel] | None]] = {
    "create_task": ("Create a new task", CreateTaskArgs),
    "list_tasks": ("List tasks, optionally filtered by status, priority or category", ListTasksArgs),
    "update_task": ("Update fields of an existing task", UpdateTaskArgs),
    "delete_task": ("Delete a task", TaskIdArgs),
    "complete_task": ("Mark a task as completed", TaskIdArgs),
    "search_tasks": ("Search tasks by title or description", SearchArgs),
    "get_task_stats": ("Get statistics about all tasks", None),
    "clear_completed": ("Remove all completed tasks", None),
}

RESOURCES = [
    {
        "uri": TASKS_RESOURCE_URI,
        "name": "All Tasks",
        "description": "Complete list of all tasks in JSON format",
        "mimeType": "application/json",
    },
]


class OperationDispatcher:
    """Routes named operations and resource reads to a TaskService."""

    def __init__(self, service: TaskService):
        self.service = service

    @property
    def operation_names(self) -> list[str]:
        return list(OPERATIONS)

    def describe_operations(self) -> list[dict[str, Any]]:
        """Describe every operation with a JSON schema of its arguments."""
        descriptions = []
        for name, (description, args_model) in OPERATIONS.items():
            if args_model is None:
                schema: dict[str, Any] = {"type": "object", "properties": {}}
            else:
                schema = args_model.model_json_schema(by_alias=True)
            descriptions.append(
                {"name": name, "description": description, "inputSchema": schema}
            )
        return descriptions

    def _resolve(self, name: str) -> Callable[..., Awaitable[OperationResult]]:
        if name not in OPERATIONS:
            raise UnknownOperationError(f"Unknown operation: {name}")
        return getattr(self.service, name)

    async def call(
        self, name: str, arguments: Mapping[str, Any] | None = None
    ) -> OperationResult:
        """Run an operation by name.

        Args:
            name: Operation name, e.g. ``"create_task"``
            arguments: Raw operation arguments

        Returns:
            The operation's result

        Raises:
            UnknownOperationError: If ``name`` is not a known operation
        """
        operation = self._resolve(name)
        return await operation(arguments)

    def list_resources(self) -> list[dict[str, str]]:
        return [dict(resource) for resource in RESOURCES]

    async def read_resource(self, uri: str) -> str:
        """Read a resource by URI.

        Raises:
            UnknownResourceError: If ``uri`` is not a served resource
        """
        if uri != TASKS_RESOURCE_URI:
            raise UnknownResourceError(f"Unknown resource: {uri}")
        return await self.service.dump_tasks_json()
