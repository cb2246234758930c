"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from taskdesk import __version__
from taskdesk.main import app
from taskdesk.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND

runner = CliRunner()


def _stored_tasks(root) -> list[dict]:
    return json.loads((root / "data" / "tasks.json").read_text(encoding="utf-8"))["tasks"]


def test_no_args_shows_help():
    result = runner.invoke(app, [])
    assert "tasks" in result.output
    assert "config" in result.output


def test_version_shows_backend(isolated_app_dirs):
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
    assert "Storage: file" in result.output


def test_unknown_command_suggests():
    result = runner.invoke(app, ["task"])
    assert result.exit_code == ERROR_INVALID_ARGS
    assert "Did you mean" in result.output


def test_unknown_subcommand_suggests():
    result = runner.invoke(app, ["tasks", "serch", "milk"])

    assert result.exit_code == ERROR_INVALID_ARGS
    assert "Did you mean this?" in result.output
    assert "search" in result.output


class TestTaskCommands:
    def test_create_writes_file(self, isolated_app_dirs):
        result = runner.invoke(
            app, ["tasks", "create", "Write docs", "-p", "high", "-c", "Work", "--due", "2025-03-01"]
        )

        assert result.exit_code == 0, result.output
        assert "✅ Task created successfully!" in result.output
        assert "🔴 Priority: high" in result.output
        [stored] = _stored_tasks(isolated_app_dirs)
        assert stored["title"] == "Write docs"
        assert stored["dueDate"] == "2025-03-01"
        assert "description" not in stored

    def test_create_rejects_bad_due_date(self, isolated_app_dirs):
        result = runner.invoke(app, ["tasks", "create", "Oops", "--due", "03/01/2025"])

        assert result.exit_code == ERROR_INVALID_ARGS
        assert "❌ Validation error: Date must be YYYY-MM-DD" in result.output
        assert not (isolated_app_dirs / "data" / "tasks.json").exists()

    def test_list_update_complete_flow(self, isolated_app_dirs):
        runner.invoke(app, ["tasks", "create", "First"])
        task_id = _stored_tasks(isolated_app_dirs)[0]["id"]

        listed = runner.invoke(app, ["tasks", "list"])
        assert "📋 Found 1 task(s):" in listed.output
        assert "📊 Summary: 1 pending | 0 in progress | 0 completed" in listed.output

        updated = runner.invoke(app, ["tasks", "update", task_id[:8], "--title", "Renamed"])
        assert updated.exit_code == 0, updated.output
        assert "Renamed" in updated.output

        completed = runner.invoke(app, ["tasks", "complete", task_id])
        assert "✅ Task completed!" in completed.output
        assert _stored_tasks(isolated_app_dirs)[0]["status"] == "completed"

    def test_update_unknown_task_is_not_found(self):
        result = runner.invoke(app, ["tasks", "update", "ffffffff", "--title", "x"])

        assert result.exit_code == ERROR_NOT_FOUND
        assert "❌ Task with ID ffffffff not found." in result.output

    def test_short_id_is_rejected(self):
        result = runner.invoke(app, ["tasks", "delete", "abc"])
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_search_and_delete(self, isolated_app_dirs):
        runner.invoke(app, ["tasks", "create", "Buy milk", "-d", "Semi-skimmed"])
        task_id = _stored_tasks(isolated_app_dirs)[0]["id"]

        found = runner.invoke(app, ["tasks", "search", "SKIMMED"])
        assert '🔍 Found 1 task(s) matching "SKIMMED":' in found.output

        deleted = runner.invoke(app, ["tasks", "delete", task_id])
        assert '🗑️ Task "Buy milk" deleted successfully.' in deleted.output
        assert _stored_tasks(isolated_app_dirs) == []

    def test_stats_empty(self):
        result = runner.invoke(app, ["tasks", "stats"])
        assert "No tasks yet. Create your first task to get started!" in result.output

    def test_clear_completed(self, isolated_app_dirs):
        runner.invoke(app, ["tasks", "create", "Done"])
        task_id = _stored_tasks(isolated_app_dirs)[0]["id"]
        runner.invoke(app, ["tasks", "complete", task_id])

        result = runner.invoke(app, ["tasks", "clear-completed"])

        assert "Cleared 1 completed task(s)." in result.output
        assert _stored_tasks(isolated_app_dirs) == []

    def test_dump_prints_json(self):
        runner.invoke(app, ["tasks", "create", "Dumped"])

        result = runner.invoke(app, ["tasks", "dump"])

        assert result.exit_code == 0
        assert [t["title"] for t in json.loads(result.output)] == ["Dumped"]


class TestCallCommand:
    def test_call_with_json_arguments(self, isolated_app_dirs):
        result = runner.invoke(
            app, ["tasks", "call", "create_task", "--args", '{"title": "Via call", "priority": "low"}']
        )

        assert result.exit_code == 0, result.output
        assert _stored_tasks(isolated_app_dirs)[0]["priority"] == "low"

    def test_call_raw_payload(self):
        result = runner.invoke(app, ["tasks", "call", "get_task_stats", "--raw"])

        payload = json.loads(result.output)
        assert payload["isError"] is False
        assert payload["content"][0]["type"] == "text"

    def test_call_raw_error_payload(self):
        result = runner.invoke(app, ["tasks", "call", "create_task", "--raw"])

        payload = json.loads(result.output)
        assert payload["isError"] is True
        assert payload["content"][0]["text"] == "❌ Validation error: Title is required"
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_call_unknown_operation(self):
        result = runner.invoke(app, ["tasks", "call", "explode"])

        assert result.exit_code == ERROR_INVALID_ARGS
        assert "Unknown operation: explode" in result.output

    def test_call_invalid_json(self):
        result = runner.invoke(app, ["tasks", "call", "list_tasks", "--args", "{nope"])
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_operations_lists_schemas(self):
        result = runner.invoke(app, ["tasks", "operations"])

        names = [op["name"] for op in json.loads(result.output)]
        assert "clear_completed" in names


class TestConfigCommands:
    def test_set_and_get(self):
        assert runner.invoke(app, ["config", "set", "storage.type", "database"]).exit_code == 0

        result = runner.invoke(app, ["config", "get", "storage.type"])
        assert result.output.strip() == "database"

    @pytest.mark.parametrize(
        "args",
        [
            ["config", "set", "storage.colour", "blue"],
            ["config", "set", "logging.level", "LOUD"],
        ],
    )
    def test_set_rejects_bad_input(self, args):
        assert runner.invoke(app, args).exit_code == ERROR_INVALID_ARGS

    def test_get_section_prints_json(self):
        runner.invoke(app, ["config", "set", "storage.type", "database"])

        result = runner.invoke(app, ["config", "get", "storage"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"type": "database", "data_dir": None}

    def test_get_unset_key(self):
        assert runner.invoke(app, ["config", "get", "storage.data_dir"]).exit_code == ERROR_NOT_FOUND

    def test_reset_with_confirmation_declined(self):
        runner.invoke(app, ["config", "set", "storage.type", "database"])

        runner.invoke(app, ["config", "reset"], input="n\n")

        assert runner.invoke(app, ["config", "get", "storage.type"]).output.strip() == "database"

    def test_reset_yes(self):
        runner.invoke(app, ["config", "set", "storage.type", "database"])

        result = runner.invoke(app, ["config", "reset", "storage.type", "--yes"])

        assert result.exit_code == 0
        assert runner.invoke(app, ["config", "get", "storage.type"]).output.strip() == "file"

    def test_show_mentions_effective_storage(self, monkeypatch):
        monkeypatch.setenv("TASKDESK_STORAGE_TYPE", "db")

        result = runner.invoke(app, ["config", "show"])

        assert "Effective storage: db" in result.output
