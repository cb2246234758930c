"""Output formatters for tasks and operation results."""

from __future__ import annotations

from rich.markup import escape

from taskdesk.models import OperationResult, Task
from taskdesk.ui.console import get_console
from taskdesk.utils.dates import format_local
from taskdesk.utils.uuid_utils import shorten_uuid

STATUS_MARKERS = {
    "pending": "📋",
    "in_progress": "⏳",
    "completed": "✅",
}

PRIORITY_MARKERS = {
    "high": "🔴",
    "medium": "🟡",
    "low": "🟢",
}

# Hand-edited records can carry values outside the known sets
UNKNOWN_MARKER = "❔"


def format_task(task: Task) -> str:
    """Render a task as indented multi-line text.

    Optional fields are only shown when set. Timestamps are shown in the
    local timezone. Every line, including the last, ends with a newline.

    Args:
        task: Task to render

    Returns:
        Formatted text
    """
    status_marker = STATUS_MARKERS.get(task.status, UNKNOWN_MARKER)
    priority_marker = PRIORITY_MARKERS.get(task.priority, UNKNOWN_MARKER)
    lines = [
        f"{status_marker} Task #{shorten_uuid(task.id)}: {task.title}",
        f"   {priority_marker} Priority: {task.priority}",
    ]
    if task.description:
        lines.append(f"   Description: {task.description}")
    if task.category:
        lines.append(f"   Category: {task.category}")
    if task.due_date:
        lines.append(f"   Due: {task.due_date}")
    lines.append(f"   Status: {task.status}")
    lines.append(f"   Created: {format_local(task.created_at)}")
    if task.completed_at:
        lines.append(f"   Completed: {format_local(task.completed_at)}")
    return "".join(f"{line}\n" for line in lines)


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {escape(message)}")


def print_result(result: OperationResult) -> None:
    """Print an operation result's text verbatim.

    Task titles are user input, so markup and highlighting are disabled.
    """
    get_console(highlight=False).print(
        result.text.rstrip("\n"), markup=False, emoji=False, soft_wrap=True
    )
