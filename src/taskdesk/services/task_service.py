"""Task service - Business logic for task operations.

This service layer sits between callers (dispatcher, CLI) and the storage
context. Every operation loads the full collection, applies its change in
memory, persists if anything changed and returns an OperationResult whose
text is ready to show to a user.
"""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Mapping
from typing import Any

from taskdesk.models import (
    CreateTaskArgs,
    ListTasksArgs,
    OperationResult,
    SearchArgs,
    Task,
    TaskIdArgs,
    TaskStorage,
    UpdateTaskArgs,
)
from taskdesk.models.storage_strategy import StorageStrategyContext
from taskdesk.services.decorators import operation_wrapper
from taskdesk.ui.formatters import format_task
from taskdesk.utils.dates import date_key, now, today_utc
from taskdesk.utils.logger import get_logger
from taskdesk.utils.uuid_utils import generate_uuid, match_prefix, shorten_uuid

# Unknown priorities from hand-edited records sort after low
PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}

# Sorts after any real YYYY-MM-DD date
NO_DUE_DATE = "9999-99-99"

DUE_SOON_DAYS = 7


def _status_counts(tasks: list[Task]) -> dict[str, int]:
    counts = Counter(task.status for task in tasks)
    return {status: counts.get(status, 0) for status in ("pending", "in_progress", "completed")}


def _format_task_list(header: str, tasks: list[Task]) -> str:
    return header + "".join(f"{format_task(task)}\n" for task in tasks)


class TaskService:
    """Service for task business logic.

    Operations accept the raw argument mapping a caller received (camelCase
    or snake_case keys) and never raise: failures are reported through the
    returned OperationResult.
    """

    def __init__(self, storage: StorageStrategyContext):
        """Initialize the task service.

        Args:
            storage: Storage context for the active backend
        """
        self.storage = storage

    def _find_task(self, collection: TaskStorage, task_id: str) -> int | None:
        """Resolve an ID prefix to a position in the collection.

        An ambiguous prefix resolves to the first match in collection order.
        """
        matches = match_prefix(collection.tasks, task_id)
        if not matches:
            return None
        if len(matches) > 1:
            get_logger("operations").warning(
                "Ambiguous task ID %r matches %d tasks (%s); using the first",
                task_id,
                len(matches),
                ", ".join(shorten_uuid(collection.tasks[i].id) for i in matches),
            )
        return matches[0]

    async def _remove_tasks(self, collection: TaskStorage, removed: list[Task]) -> None:
        """Persist a collection that had tasks removed from it.

        ``save_all`` alone does not remove rows from row-oriented backends, so
        each removed task is also deleted individually where supported.
        """
        await self.storage.save_tasks(collection)
        if self.storage.supports("delete_one"):
            for task in removed:
                await self.storage.delete_task(task.id)

    @operation_wrapper
    async def create_task(self, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        """Create a pending task with a fresh ID."""
        args = CreateTaskArgs.model_validate(dict(arguments or {}))
        collection = await self.storage.load_tasks()

        task = Task(
            id=generate_uuid(),
            title=args.title,
            description=args.description,
            priority=args.priority,
            category=args.category,
            due_date=args.due_date,
            status="pending",
            created_at=now(),
        )
        collection.tasks.append(task)
        await self.storage.save_tasks(collection)

        return OperationResult.ok(
            f"✅ Task created successfully!\n\n{format_task(task)}",
            data=task.to_dict(),
        )

    @operation_wrapper
    async def list_tasks(self, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        """List tasks matching the filters, most urgent first.

        Tasks are ordered by priority (high first), then by due date with
        undated tasks last. The summary line counts the whole collection.
        """
        args = ListTasksArgs.model_validate(dict(arguments or {}))
        collection = await self.storage.load_tasks()

        tasks = collection.tasks
        if args.status != "all":
            tasks = [task for task in tasks if task.status == args.status]
        if args.priority != "all":
            tasks = [task for task in tasks if task.priority == args.priority]
        if args.category:
            wanted = args.category.lower()
            tasks = [task for task in tasks if task.category and task.category.lower() == wanted]

        if not tasks:
            return OperationResult.ok("No tasks found matching the criteria.", data=[])

        tasks = sorted(
            tasks,
            key=lambda task: (
                PRIORITY_RANK.get(task.priority, len(PRIORITY_RANK)),
                task.due_date or NO_DUE_DATE,
            ),
        )
        counts = _status_counts(collection.tasks)
        text = _format_task_list(f"📋 Found {len(tasks)} task(s):\n\n", tasks)
        text += (
            f"\n📊 Summary: {counts['pending']} pending | "
            f"{counts['in_progress']} in progress | {counts['completed']} completed"
        )
        return OperationResult.ok(text, data=[task.to_dict() for task in tasks])

    @operation_wrapper
    async def update_task(self, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        """Apply the explicitly provided fields to the task matching an ID prefix.

        Setting status to completed stamps the completion time unless one is
        already recorded; setting any other status clears it.
        """
        args = UpdateTaskArgs.model_validate(dict(arguments or {}))
        collection = await self.storage.load_tasks()

        index = self._find_task(collection, args.task_id)
        if index is None:
            return OperationResult.not_found(args.task_id)

        task = collection.tasks[index]
        changes = args.changes()
        updated = task.model_copy(update=changes)
        if "status" in changes:
            if changes["status"] == "completed":
                if updated.completed_at is None:
                    updated.completed_at = now()
            else:
                updated.completed_at = None

        collection.tasks[index] = updated
        await self.storage.save_tasks(collection)

        return OperationResult.ok(
            f"✅ Task updated successfully!\n\n{format_task(updated)}",
            data=updated.to_dict(),
        )

    @operation_wrapper
    async def delete_task(self, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        """Delete the task matching an ID prefix."""
        args = TaskIdArgs.model_validate(dict(arguments or {}))
        collection = await self.storage.load_tasks()

        index = self._find_task(collection, args.task_id)
        if index is None:
            return OperationResult.not_found(args.task_id)

        task = collection.tasks.pop(index)
        await self._remove_tasks(collection, [task])

        return OperationResult.ok(
            f'🗑️ Task "{task.title}" deleted successfully.', data=task.to_dict()
        )

    @operation_wrapper
    async def complete_task(self, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        """Mark the task matching an ID prefix as completed now."""
        args = TaskIdArgs.model_validate(dict(arguments or {}))
        collection = await self.storage.load_tasks()

        index = self._find_task(collection, args.task_id)
        if index is None:
            return OperationResult.not_found(args.task_id)

        task = collection.tasks[index]
        task.status = "completed"
        task.completed_at = now()
        await self.storage.save_tasks(collection)

        return OperationResult.ok(
            f"✅ Task completed!\n\n{format_task(task)}", data=task.to_dict()
        )

    @operation_wrapper
    async def search_tasks(self, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        """Case-insensitive substring search over title and description."""
        args = SearchArgs.model_validate(dict(arguments or {}))
        collection = await self.storage.load_tasks()

        needle = args.query.lower()
        tasks = [
            task
            for task in collection.tasks
            if needle in task.title.lower()
            or (task.description is not None and needle in task.description.lower())
        ]

        if not tasks:
            return OperationResult.ok(f'No tasks found matching "{args.query}".', data=[])

        text = _format_task_list(
            f'🔍 Found {len(tasks)} task(s) matching "{args.query}":\n\n', tasks
        )
        return OperationResult.ok(text, data=[task.to_dict() for task in tasks])

    @operation_wrapper
    async def get_task_stats(self, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        """Aggregate counts by status, priority and category plus due-date alerts.

        Overdue and due-soon counts ignore completed tasks and compare due
        dates against the current UTC date.
        """
        collection = await self.storage.load_tasks()
        tasks = collection.tasks
        total = len(tasks)

        if total == 0:
            return OperationResult.ok(
                "No tasks yet. Create your first task to get started!",
                data={"total": 0},
            )

        by_status = _status_counts(tasks)
        priorities = Counter(task.priority for task in tasks)
        by_priority = {priority: priorities.get(priority, 0) for priority in ("high", "medium", "low")}
        categories = Counter(task.category for task in tasks if task.category)
        by_category = {category: categories[category] for category in sorted(categories)}

        today = today_utc()
        today_key = date_key(today)
        due_soon_key = date_key(today, DUE_SOON_DAYS)
        open_dated = [
            task.due_date for task in tasks if task.status != "completed" and task.due_date
        ]
        overdue = sum(1 for due in open_dated if due < today_key)
        due_soon = sum(1 for due in open_dated if today_key <= due <= due_soon_key)

        completion_rate = f"{by_status['completed'] / total * 100:.1f}"

        text = (
            "📊 Task Manager Statistics\n"
            + "=" * 30
            + f"\n\n📈 Total Tasks: {total}\n"
            f"✅ Completion Rate: {completion_rate}%\n\n"
            "Status Breakdown:\n"
            f"  📋 Pending: {by_status['pending']}\n"
            f"  ⏳ In Progress: {by_status['in_progress']}\n"
            f"  ✅ Completed: {by_status['completed']}\n\n"
            "Priority Breakdown:\n"
            f"  🔴 High: {by_priority['high']}\n"
            f"  🟡 Medium: {by_priority['medium']}\n"
            f"  🟢 Low: {by_priority['low']}\n"
        )
        if by_category:
            text += "\nCategories:\n"
            text += "".join(f"  📁 {name}: {count}\n" for name, count in by_category.items())
        if overdue:
            text += f"\n⚠️ Overdue Tasks: {overdue}\n"
        if due_soon:
            text += f"📅 Due Within {DUE_SOON_DAYS} Days: {due_soon}\n"

        return OperationResult.ok(
            text,
            data={
                "total": total,
                "completionRate": float(completion_rate),
                "byStatus": by_status,
                "byPriority": by_priority,
                "byCategory": by_category,
                "overdue": overdue,
                "dueSoon": due_soon,
            },
        )

    @operation_wrapper
    async def clear_completed(self, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        """Remove every completed task."""
        collection = await self.storage.load_tasks()

        completed = [task for task in collection.tasks if task.status == "completed"]
        if not completed:
            return OperationResult.ok(
                "No completed tasks to clear.",
                data={"cleared": 0, "remaining": len(collection.tasks)},
            )

        collection.tasks = [task for task in collection.tasks if task.status != "completed"]
        await self._remove_tasks(collection, completed)

        remaining = len(collection.tasks)
        return OperationResult.ok(
            f"🧹 Cleared {len(completed)} completed task(s). "
            f"{remaining} active task(s) remaining.",
            data={"cleared": len(completed), "remaining": remaining},
        )

    async def dump_tasks_json(self) -> str:
        """Get every task as pretty-printed JSON (camelCase keys)."""
        collection = await self.storage.load_tasks()
        return json.dumps(
            [task.to_dict() for task in collection.tasks], indent=2, ensure_ascii=False
        )
