"""
Main CLI entry point for claude-sounds.

Usage:
    uvx claude-sounds                                  (interactive quickstart)
    uvx claude-sounds add-sound --event Stop --file ~/ding.wav
    uvx claude-sounds {list,test,remove,clear,doctor}
    uvx claude-sounds preset {minimal,complete,development}
"""

import logging
from pathlib import Path

import typer
from rich.logging import RichHandler

from claude_sounds import __version__
from claude_sounds.config import LOG_LEVEL_ENV, SETTINGS_ENV, Config
from claude_sounds.output import console, err_console

app = typer.Typer(
    name="claude-sounds",
    help="Audio notifications for Claude Code events",
    invoke_without_command=True,
)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    if value:
        console.print(f"claude-sounds {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    settings: Path | None = typer.Option(
        None,
        "--settings",
        envvar=SETTINGS_ENV,
        help="Claude Code settings file (default: ~/.claude/settings.json)",
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level", envvar=LOG_LEVEL_ENV, help="Logging level"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Add audio notifications to Claude Code events. Run without a command for guided setup."""
    setup_logging(log_level)
    ctx.obj = Config.from_env(settings)

    if ctx.invoked_subcommand is None:
        from claude_sounds.commands.quickstart import run_quickstart

        run_quickstart(ctx.obj)


@app.command("add-sound")
def add_sound(
    ctx: typer.Context,
    event: str | None = typer.Option(
        None, "--event", "-e", help="Event (Stop, Notification, PreToolUse, PostToolUse, SubagentStop)"
    ),
    file: str | None = typer.Option(None, "--file", "-f", help="Path to audio file"),
    events: str | None = typer.Option(None, "--events", help="Comma-separated list of events"),
    matcher: str | None = typer.Option(
        None, "--matcher", "-m", help="Tool matcher for PreToolUse/PostToolUse"
    ),
) -> None:
    """Add an audio hook for one or more events."""
    from claude_sounds.commands.sounds import run_add_sound

    if not file:
        console.print("[red]Error:[/red] --file option is required")
        raise typer.Exit(1)

    selected = [e.strip() for e in events.split(",") if e.strip()] if events else [event]
    if not selected or not selected[0]:
        console.print("[red]Error:[/red] --event or --events option is required")
        raise typer.Exit(1)

    run_add_sound(ctx.obj, selected, file, matcher=matcher)


@app.command("list")
def list_hooks(ctx: typer.Context) -> None:
    """Display all claude-sounds hooks."""
    from claude_sounds.commands.sounds import run_list

    run_list(ctx.obj)


@app.command()
def test(
    ctx: typer.Context,
    event: str | None = typer.Argument(None, help="Event to test"),
    all_events: bool = typer.Option(False, "--all", "-a", help="Test all events"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Don't actually play sounds"),
    show_command: bool = typer.Option(
        False, "--show-command", "-s", help="Display executed commands"
    ),
    delay: int = typer.Option(1000, "--delay", min=0, help="Delay between sounds (ms)"),
) -> None:
    """Play back audio hooks."""
    from claude_sounds.commands.playback import run_test

    run_test(
        ctx.obj,
        event,
        all_events=all_events,
        verbose=verbose,
        dry_run=dry_run,
        show_command=show_command,
        delay_ms=delay,
    )


@app.command()
def remove(
    ctx: typer.Context,
    event: str | None = typer.Argument(None, help="Event to remove hooks for"),
) -> None:
    """Remove claude-sounds hooks for an event."""
    from claude_sounds.commands.sounds import run_remove

    run_remove(ctx.obj, event)


@app.command()
def clear(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Remove all claude-sounds hooks."""
    from claude_sounds.commands.sounds import run_clear

    run_clear(ctx.obj, assume_yes=yes)


@app.command()
def doctor(ctx: typer.Context) -> None:
    """Run diagnostics."""
    from claude_sounds.commands.doctor import run_doctor

    run_doctor(ctx.obj)


@app.command()
def preset(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Preset name (minimal, complete, development)"),
) -> None:
    """Apply a predefined set of hooks."""
    from claude_sounds.commands.sounds import run_preset

    run_preset(ctx.obj, name)


if __name__ == "__main__":
    app()
