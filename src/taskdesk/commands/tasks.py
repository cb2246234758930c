"""Task management commands."""

import json
from typing import Annotated, Any

import typer

from taskdesk.models import OperationResult
from taskdesk.services import OperationDispatcher, TaskService
from taskdesk.services.dispatcher import TASKS_RESOURCE_URI
from taskdesk.services.storage_router import get_storage_context
from taskdesk.ui.console import get_console
from taskdesk.ui.formatters import format_error, print_result
from taskdesk.utils.exit_codes import ERROR_INVALID_ARGS, exit_code_for
from taskdesk.utils.typer_helpers import SuggestingGroup

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


def get_dispatcher() -> OperationDispatcher:
    """Build a dispatcher over the configured storage backend."""
    return OperationDispatcher(TaskService(get_storage_context()))


def _provided(**options: Any) -> dict[str, Any]:
    # Options left at None were not given on the command line
    return {key: value for key, value in options.items() if value is not None}


async def _run(operation: str, arguments: dict[str, Any] | None = None) -> OperationResult:
    result = await get_dispatcher().call(operation, arguments)
    print_result(result)
    if result.kind != "ok":
        raise typer.Exit(code=exit_code_for(result.kind))
    return result


@app.command("create")
@command_wrapper
async def create_command(
    title: Annotated[str, typer.Argument(help="Task title")],
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Task description")
    ] = None,
    priority: Annotated[
        str | None, typer.Option("--priority", "-p", help="low, medium or high")
    ] = None,
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Task category")
    ] = None,
    due: Annotated[
        str | None, typer.Option("--due", help="Due date (YYYY-MM-DD)")
    ] = None,
) -> None:
    """Create a new task."""
    await _run(
        "create_task",
        _provided(
            title=title,
            description=description,
            priority=priority,
            category=category,
            dueDate=due,
        ),
    )


@app.command("list")
@command_wrapper
async def list_command(
    status: Annotated[
        str | None,
        typer.Option("--status", "-s", help="pending, in_progress, completed or all"),
    ] = None,
    priority: Annotated[
        str | None, typer.Option("--priority", "-p", help="low, medium, high or all")
    ] = None,
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Category (case-insensitive)")
    ] = None,
) -> None:
    """List tasks, most urgent first."""
    await _run(
        "list_tasks", _provided(status=status, priority=priority, category=category)
    )


@app.command("update")
@command_wrapper
async def update_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix (8+ characters)")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="New description")
    ] = None,
    priority: Annotated[
        str | None, typer.Option("--priority", "-p", help="low, medium or high")
    ] = None,
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="New category")
    ] = None,
    due: Annotated[
        str | None, typer.Option("--due", help="New due date (YYYY-MM-DD)")
    ] = None,
    status: Annotated[
        str | None,
        typer.Option("--status", "-s", help="pending, in_progress or completed"),
    ] = None,
) -> None:
    """Update fields of a task. Only the given options change."""
    await _run(
        "update_task",
        _provided(
            taskId=task_id,
            title=title,
            description=description,
            priority=priority,
            category=category,
            dueDate=due,
            status=status,
        ),
    )


@app.command("delete")
@command_wrapper
async def delete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix (8+ characters)")],
) -> None:
    """Delete a task."""
    await _run("delete_task", {"taskId": task_id})


@app.command("complete")
@command_wrapper
async def complete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix (8+ characters)")],
) -> None:
    """Mark a task as completed."""
    await _run("complete_task", {"taskId": task_id})


@app.command("search")
@command_wrapper
async def search_command(
    query: Annotated[str, typer.Argument(help="Text to look for in title or description")],
) -> None:
    """Search tasks by title or description."""
    await _run("search_tasks", {"query": query})


@app.command("stats")
@command_wrapper
async def stats_command() -> None:
    """Show task statistics."""
    await _run("get_task_stats")


@app.command("clear-completed")
@command_wrapper
async def clear_completed_command() -> None:
    """Remove all completed tasks."""
    await _run("clear_completed")


@app.command("dump")
@command_wrapper
async def dump_command() -> None:
    """Print every task as JSON."""
    text = await get_dispatcher().read_resource(TASKS_RESOURCE_URI)
    get_console().print_json(text)


@app.command("operations")
@command_wrapper
def operations_command() -> None:
    """Describe the available operations and their arguments."""
    get_console().print_json(json.dumps(get_dispatcher().describe_operations()))


@app.command("call")
@command_wrapper
async def call_command(
    operation: Annotated[str, typer.Argument(help="Operation name, e.g. create_task")],
    args: Annotated[
        str, typer.Option("--args", "-a", help="Operation arguments as a JSON object")
    ] = "{}",
    raw: Annotated[
        bool, typer.Option("--raw", help="Print the result as a JSON content payload")
    ] = False,
) -> None:
    """Invoke an operation by name, the way a protocol client would."""
    try:
        arguments = json.loads(args)
    except json.JSONDecodeError as e:
        format_error(f"--args is not valid JSON: {e}")
        raise typer.Exit(code=ERROR_INVALID_ARGS) from e

    result = await get_dispatcher().call(operation, arguments)
    if raw:
        get_console().print_json(json.dumps(result.to_content(), ensure_ascii=False))
    else:
        print_result(result)
    if result.kind != "ok":
        raise typer.Exit(code=exit_code_for(result.kind))
