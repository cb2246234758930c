"""Typer helper utilities."""

from collections.abc import Iterable
from difflib import get_close_matches

import typer
from rich.markup import escape
from typer.core import TyperGroup

from taskdesk.ui.console import get_console
from taskdesk.utils.exit_codes import ERROR_INVALID_ARGS


def suggest_commands(attempted: str, names: Iterable[str]) -> list[str]:
    """Get up to three command names close to a mistyped one, best first."""
    return get_close_matches(attempted, sorted(names), n=3, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Command group that answers an unknown command with close matches.

    Used by the root app and the ``tasks`` and ``config`` sub-apps, so
    ``taskdesk tasks serch`` points at ``search``. Without a close match the
    usual usage error is raised.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            suggestions = suggest_commands(args[0], self.commands) if args else []
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{escape(args[0])}" '
                f'for "{escape(ctx.command_path)}"'
            )
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            console.print()
            console.print(f"Run '{escape(ctx.command_path)} --help' for usage.")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
