"""Main entry point for taskdesk."""

import typer

from taskdesk import __version__
from taskdesk.commands import config, tasks
from taskdesk.services.config_service import get_config_service
from taskdesk.services.storage_router import get_storage_context
from taskdesk.ui.console import get_console
from taskdesk.utils.logger import set_log_level
from taskdesk.utils.typer_helpers import SuggestingGroup

# Create main app with custom group class
app = typer.Typer(
    name="taskdesk",
    cls=SuggestingGroup,
    help="Task tracking with JSON file or SQLite storage",
    no_args_is_help=True,
)

# Add subcommands
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.callback()
def startup() -> None:
    """Task tracking with JSON file or SQLite storage."""
    set_log_level(get_config_service().config.logging.level)


@app.command()
def version() -> None:
    """Show version information and the active storage backend."""
    console = get_console()
    console.print(f"[bold]taskdesk[/bold] version [cyan]{__version__}[/cyan]")

    storage = get_storage_context()
    console.print(f"Storage: [cyan]{storage.storage_type}[/cyan] ({storage.location})")


def main():
    """Main entry point."""

    try:
        app()
    finally:
        # Only close storage that this run actually opened
        if get_storage_context.cache_info().currsize:
            get_storage_context().close()


if __name__ == "__main__":
    main()
