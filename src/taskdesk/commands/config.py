"""Configuration management commands."""

from typing import Annotated

import typer
from pydantic import BaseModel, ValidationError

from taskdesk.services.config_service import get_config_service
from taskdesk.ui.console import get_console
from taskdesk.ui.formatters import format_error, format_success
from taskdesk.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from taskdesk.utils.typer_helpers import SuggestingGroup

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the configuration file contents and the effective storage."""
    config_svc = get_config_service()
    console = get_console()
    console.print(f"[dim]{config_svc.config_path}[/dim]")
    console.print_json(config_svc.config.model_dump_json())

    settings = config_svc.storage_settings()
    console.print(
        f"Effective storage: [cyan]{settings.type}[/cyan] "
        f"in [cyan]{config_svc.resolve_data_dir()}[/cyan]"
    )


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., storage.type)")],
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if value is None:
        format_error(f"Configuration key '{key}' not found or unset")
        raise typer.Exit(ERROR_NOT_FOUND)
    if isinstance(value, BaseModel):
        get_console().print_json(value.model_dump_json())
    else:
        get_console().print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., storage.type)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    try:
        get_config_service().set(key, value)
    except KeyError as e:
        format_error(str(e.args[0]))
        raise typer.Exit(ERROR_INVALID_ARGS) from e
    except ValidationError as e:
        format_error(f"Invalid value for '{key}': {e.errors()[0]['msg']}")
        raise typer.Exit(ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[str | None, typer.Argument(help="Configuration key to reset")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        target = f"'{key}'" if key else "all configuration"
        if not typer.confirm(f"Reset {target} to defaults?"):
            raise typer.Exit(0)
    try:
        get_config_service().reset(key)
    except KeyError as e:
        format_error(str(e.args[0]))
        raise typer.Exit(ERROR_INVALID_ARGS) from e
    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
