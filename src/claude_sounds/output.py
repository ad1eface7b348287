"""
Console helpers shared by the command modules.
"""

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from claude_sounds.errors import ClaudeSoundsError

console = Console()
err_console = Console(stderr=True)


def fail(error: ClaudeSoundsError) -> NoReturn:
    """Print a user-facing error (and its remedy, if any) and exit 1."""
    console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False)
    if error.hint:
        console.print(f"[yellow]{escape(error.hint)}[/yellow]", highlight=False)
    raise typer.Exit(1)
