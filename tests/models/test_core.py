"""Unit tests for the task and argument models (models/core.py)."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from taskdesk.models import (
    CreateTaskArgs,
    ListTasksArgs,
    OperationResult,
    SearchArgs,
    Task,
    TaskIdArgs,
    TaskStorage,
    UpdateTaskArgs,
    describe_validation_error,
)


def _messages(model, data) -> list[str]:
    with pytest.raises(ValidationError) as exc_info:
        model.model_validate(data)
    return describe_validation_error(exc_info.value)


# ---------------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------------


class TestTask:
    def test_defaults(self):
        task = Task(id="abc", title="Write docs", created_at=datetime.now(UTC))
        assert task.priority == "medium"
        assert task.status == "pending"
        assert task.completed_at is None

    def test_accepts_camel_case_input(self):
        task = Task.model_validate(
            {
                "id": "abc",
                "title": "Write docs",
                "dueDate": "2025-03-01",
                "createdAt": "2025-01-01T10:00:00.000Z",
                "completedAt": None,
            }
        )
        assert task.due_date == "2025-03-01"
        assert task.created_at == datetime(2025, 1, 1, 10, 0, tzinfo=UTC)

    def test_to_dict_uses_aliases_and_omits_absent_fields(self, make_task):
        task = make_task(due_date="2025-03-01")
        data = task.to_dict()
        assert data["dueDate"] == "2025-03-01"
        assert "createdAt" in data
        assert "description" not in data
        assert "completedAt" not in data
        assert "due_date" not in data

    def test_stored_values_are_kept_as_is(self, make_task):
        task = make_task(title="   ", priority="urgent", status="done", due_date="01/02/2025")
        assert (task.title, task.priority, task.status, task.due_date) == (
            "   ",
            "urgent",
            "done",
            "01/02/2025",
        )

    def test_column_types_are_still_checked(self):
        with pytest.raises(ValidationError):
            Task(id="abc", title="t", created_at="yesterday")


class TestTaskStorage:
    def test_to_json_is_pretty_printed_with_aliases(self, make_task):
        storage = TaskStorage(
            tasks=[make_task()], last_updated=datetime(2025, 1, 2, tzinfo=UTC)
        )
        text = storage.to_json()
        assert text.startswith('{\n  "tasks": [')
        parsed = json.loads(text)
        assert set(parsed) == {"tasks", "lastUpdated"}
        assert parsed["tasks"][0]["title"] == "Task 1"


# ---------------------------------------------------------------------------
# Argument models
# ---------------------------------------------------------------------------


class TestCreateTaskArgs:
    def test_missing_title(self):
        assert _messages(CreateTaskArgs, {}) == ["Title is required"]

    def test_empty_title(self):
        assert _messages(CreateTaskArgs, {"title": ""}) == ["Title is required"]

    def test_invalid_priority_lists_choices(self):
        assert _messages(CreateTaskArgs, {"title": "x", "priority": "urgent"}) == [
            "Invalid value 'urgent'. Expected one of: 'low', 'medium', 'high'"
        ]

    def test_bad_due_date(self):
        assert _messages(CreateTaskArgs, {"title": "x", "dueDate": "tomorrow"}) == [
            "Date must be YYYY-MM-DD"
        ]

    def test_due_date_is_only_checked_syntactically(self):
        args = CreateTaskArgs.model_validate({"title": "x", "dueDate": "2025-02-30"})
        assert args.due_date == "2025-02-30"

    def test_blank_title(self):
        assert _messages(CreateTaskArgs, {"title": "   "}) == ["Title is required"]

    def test_reports_every_violation(self):
        messages = _messages(CreateTaskArgs, {"priority": "urgent", "dueDate": "soon"})
        assert len(messages) == 3
        assert "Title is required" in messages

    def test_snake_case_and_unknown_keys(self):
        args = CreateTaskArgs.model_validate(
            {"title": "x", "due_date": "2025-01-01", "color": "red"}
        )
        assert args.due_date == "2025-01-01"
        assert args.priority == "medium"


class TestListTasksArgs:
    def test_defaults_to_all(self):
        args = ListTasksArgs.model_validate({})
        assert args.status == "all"
        assert args.priority == "all"
        assert args.category is None

    def test_invalid_status(self):
        assert _messages(ListTasksArgs, {"status": "done"}) == [
            "Invalid value 'done'. Expected one of: "
            "'pending', 'in_progress', 'completed', 'all'"
        ]


class TestUpdateTaskArgs:
    def test_changes_only_include_provided_fields(self):
        args = UpdateTaskArgs.model_validate({"taskId": "12345678", "title": "New"})
        assert args.changes() == {"title": "New"}

    def test_explicit_null_clears_optional_fields(self):
        args = UpdateTaskArgs.model_validate({"taskId": "12345678", "dueDate": None})
        assert args.changes() == {"due_date": None}

    def test_null_title_rejected(self):
        assert _messages(UpdateTaskArgs, {"taskId": "12345678", "title": None}) == [
            "Title cannot be null"
        ]

    def test_short_task_id(self):
        assert _messages(UpdateTaskArgs, {"taskId": "1234"}) == [
            "Task ID must be at least 8 characters"
        ]

    def test_missing_task_id(self):
        assert _messages(TaskIdArgs, {}) == ["Task ID is required"]


class TestSearchArgs:
    def test_empty_query(self):
        assert _messages(SearchArgs, {"query": ""}) == ["Search query is required"]

    def test_missing_query(self):
        assert _messages(SearchArgs, {}) == ["Search query is required"]


# ---------------------------------------------------------------------------
# OperationResult
# ---------------------------------------------------------------------------


class TestOperationResult:
    def test_validation_error_text(self):
        result = OperationResult.validation_error(["Title is required", "Date must be YYYY-MM-DD"])
        assert result.text == "❌ Validation error: Title is required, Date must be YYYY-MM-DD"
        assert result.is_error

    def test_not_found_is_not_an_error(self):
        result = OperationResult.not_found("deadbeef")
        assert result.text == "❌ Task with ID deadbeef not found."
        assert not result.is_error

    def test_to_content(self):
        content = OperationResult.error("boom").to_content()
        assert content == {
            "content": [{"type": "text", "text": "❌ Error: boom"}],
            "isError": True,
        }
