"""Task data models.

Tasks are persisted with camelCase field names (``dueDate``, ``createdAt``)
while Python code uses snake_case attributes. Every model here accepts both
spellings on input and serializes with the camelCase aliases.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

Priority = Literal["low", "medium", "high"]
Status = Literal["pending", "in_progress", "completed"]
ResultKind = Literal["ok", "not_found", "validation_error", "error"]

PRIORITIES: tuple[str, ...] = ("low", "medium", "high")
STATUSES: tuple[str, ...] = ("pending", "in_progress", "completed")

DUE_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MIN_TASK_ID_LENGTH = 8

# Human readable names used when a required argument is missing
_FIELD_LABELS = {
    "title": "Title",
    "taskId": "Task ID",
    "query": "Search query",
}


def _require_title(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("title_required", "Title is required")
    return value


def _check_due_date(value: str) -> str:
    # Syntactic check only, "2025-02-30" is accepted
    if not DUE_DATE_PATTERN.match(value):
        raise PydanticCustomError("due_date_format", "Date must be YYYY-MM-DD")
    return value


def _check_task_id(value: str) -> str:
    if len(value) < MIN_TASK_ID_LENGTH:
        raise PydanticCustomError(
            "task_id_too_short",
            "Task ID must be at least {min_length} characters",
            {"min_length": MIN_TASK_ID_LENGTH},
        )
    return value


def _check_query(value: str) -> str:
    if not value:
        raise PydanticCustomError("query_required", "Search query is required")
    return value


def _optional(check):
    def validate(value: str | None) -> str | None:
        return value if value is None else check(value)

    return validate


def _choice_validator(*choices: str, allow_none: bool = False):
    expected = ", ".join(f"'{choice}'" for choice in choices)

    def validate(value: Any) -> Any:
        if value is None and allow_none:
            return value
        if value not in choices:
            raise PydanticCustomError(
                "invalid_choice",
                "Invalid value '{value}'. Expected one of: {expected}",
                {"value": value, "expected": expected},
            )
        return value

    return BeforeValidator(validate)


# Validators wrap the whole (optional) type so a bad value reports one error
Title = Annotated[str, AfterValidator(_require_title)]
OptionalTitle = Annotated[str | None, AfterValidator(_optional(_require_title))]
OptionalDueDate = Annotated[str | None, AfterValidator(_optional(_check_due_date))]
TaskId = Annotated[str, AfterValidator(_check_task_id)]
Query = Annotated[str, AfterValidator(_check_query)]
PriorityValue = Annotated[Priority, _choice_validator(*PRIORITIES)]
OptionalPriority = Annotated[
    Priority | None, _choice_validator(*PRIORITIES, allow_none=True)
]
OptionalStatus = Annotated[Status | None, _choice_validator(*STATUSES, allow_none=True)]
PriorityFilter = Annotated[
    Literal["low", "medium", "high", "all"], _choice_validator(*PRIORITIES, "all")
]
StatusFilter = Annotated[
    Literal["pending", "in_progress", "completed", "all"],
    _choice_validator(*STATUSES, "all"),
]


class CamelModel(BaseModel):
    """Base model using camelCase aliases for (de)serialization."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Task(CamelModel):
    """Task model representing a complete task entity.

    Stored records are taken as they are. Input rules live on the argument
    models, so a hand-edited task that breaks one still loads and survives
    the next save.

    Attributes:
        id: Unique identifier (UUID4), immutable after creation
        title: Task title
        description: Optional longer description
        priority: Normally low, medium or high
        category: Optional free-form category
        due_date: Optional due date as YYYY-MM-DD
        status: Normally pending, in_progress or completed
        created_at: Creation timestamp
        completed_at: Completion timestamp, present only while completed
    """

    id: str
    title: str
    description: str | None = None
    priority: str = "medium"
    category: str | None = None
    due_date: str | None = None
    status: str = "pending"
    created_at: datetime
    completed_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskStorage(CamelModel):
    """The full task collection plus the time it was last persisted."""

    tasks: list[Task] = Field(default_factory=list)
    last_updated: datetime

    def to_json(self) -> str:
        """Serialize the collection as pretty-printed JSON."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


# ============================================================================
# Operation arguments
# ============================================================================


class CreateTaskArgs(CamelModel):
    """Arguments for creating a task."""

    title: Title
    description: str | None = None
    priority: PriorityValue = "medium"
    category: str | None = None
    due_date: OptionalDueDate = None


class ListTasksArgs(CamelModel):
    """Filters for listing tasks. ``all`` disables a filter."""

    status: StatusFilter = "all"
    priority: PriorityFilter = "all"
    category: str | None = None


class UpdateTaskArgs(CamelModel):
    """Partial update of a task.

    Only fields explicitly present in the input are applied; use
    ``model_dump(exclude_unset=True)`` to recover them. An explicit ``null``
    clears description, category or due date.
    """

    task_id: TaskId
    title: OptionalTitle = None
    description: str | None = None
    priority: OptionalPriority = None
    category: str | None = None
    due_date: OptionalDueDate = None
    status: OptionalStatus = None

    @field_validator("title", "priority", "status", mode="before")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            raise PydanticCustomError(
                "not_nullable",
                "{field} cannot be null",
                {"field": info.field_name.capitalize()},
            )
        return value

    def changes(self) -> dict[str, Any]:
        """Return only the task fields the caller explicitly provided."""
        return self.model_dump(exclude_unset=True, exclude={"task_id"})


class TaskIdArgs(CamelModel):
    """Arguments for operations addressing a single task by ID prefix."""

    task_id: TaskId


class SearchArgs(CamelModel):
    """Arguments for substring search."""

    query: Query


# ============================================================================
# Operation result
# ============================================================================


class OperationResult(BaseModel):
    """Outcome of a task operation.

    Attributes:
        kind: ok, not_found, validation_error or error
        text: Human-readable result text
        data: Structured payload (task dict, list of task dicts, stats, ...)
    """

    kind: ResultKind = "ok"
    text: str
    data: Any = None

    @property
    def is_error(self) -> bool:
        return self.kind in ("validation_error", "error")

    @classmethod
    def ok(cls, text: str, data: Any = None) -> OperationResult:
        return cls(kind="ok", text=text, data=data)

    @classmethod
    def not_found(cls, task_id: str) -> OperationResult:
        return cls(kind="not_found", text=f"❌ Task with ID {task_id} not found.")

    @classmethod
    def validation_error(cls, messages: list[str]) -> OperationResult:
        return cls(
            kind="validation_error",
            text=f"❌ Validation error: {', '.join(messages)}",
            data=messages,
        )

    @classmethod
    def error(cls, message: str) -> OperationResult:
        return cls(kind="error", text=f"❌ Error: {message}")

    def to_content(self) -> dict[str, Any]:
        """Render as a text content payload for a protocol transport."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


def describe_validation_error(error: ValidationError) -> list[str]:
    """Turn a pydantic ValidationError into one message per violation.

    Args:
        error: Validation error raised by one of the argument models

    Returns:
        Human-readable messages, in the order pydantic reported them
    """
    messages = []
    for detail in error.errors():
        field = str(detail["loc"][-1]) if detail["loc"] else ""
        if detail["type"] == "missing":
            label = _FIELD_LABELS.get(field, field[:1].upper() + field[1:])
            messages.append(f"{label} is required")
        else:
            messages.append(detail["msg"])
    return messages
