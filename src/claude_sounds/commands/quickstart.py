"""
Quickstart - interactive setup when claude-sounds runs without a command.
"""

import typer
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from claude_sounds.audio import get_system_sound_path, get_system_sounds
from claude_sounds.commands.playback import run_test
from claude_sounds.commands.sounds import print_add_result
from claude_sounds.config import Config
from claude_sounds.diagnostics import check_claude_installation
from claude_sounds.errors import ClaudeSoundsError
from claude_sounds.output import console, fail
from claude_sounds.registry import HookRegistry
from claude_sounds.types import HookEvent

CUSTOM_CHOICE = 0


def select_events() -> list[HookEvent]:
    console.print("\n[bold]Which events would you like audio notifications for?[/bold]")
    return [
        event
        for event in HookEvent
        if Confirm.ask(
            f"  {event.value} ({event.description})",
            default=event is HookEvent.STOP,
        )
    ]


def select_sound() -> str:
    """Pick a system sound by number, or 0 for a custom file path."""
    sounds = get_system_sounds()

    table = Table(title="Notification Sounds")
    table.add_column("#", style="dim", width=4)
    table.add_column("Sound", style="cyan")
    table.add_row(str(CUSTOM_CHOICE), "Custom audio file")
    for i, sound in enumerate(sounds, 1):
        table.add_row(str(i), f"System: {sound}")

    console.print()
    console.print(table)

    choice = IntPrompt.ask(
        "Choose your notification sound",
        choices=[str(i) for i in range(len(sounds) + 1)],
        default=1 if sounds else CUSTOM_CHOICE,
    )
    if choice == CUSTOM_CHOICE:
        while True:
            path = Prompt.ask("Enter path to your audio file").strip()
            if path:
                return path
            console.print("[red]Please enter a valid file path[/red]")
    return get_system_sound_path(sounds[choice - 1])


def run_quickstart(config: Config) -> None:
    """Check for Claude Code, pick events and a sound, add and test them."""
    console.print("\n[bold]claude-sounds - Claude Code Audio Hooks[/bold]\n")

    installed, version = check_claude_installation()
    if installed:
        console.print(f"[green]✓[/green] Claude Code {version} detected")
    else:
        console.print("[yellow]![/yellow] Claude Code not found")
        console.print("  Install it with: [dim]npm install -g @anthropic-ai/claude-code[/dim]")
        if not Confirm.ask("Continue without Claude Code?", default=False):
            raise typer.Exit(1)

    events = select_events()
    if not events:
        console.print("[dim]No events selected. Exiting.[/dim]")
        return

    audio_file = select_sound()

    registry = HookRegistry.from_config(config)
    console.print()
    for event in events:
        try:
            print_add_result(registry.add(event, audio_file))
        except ClaudeSoundsError as e:
            fail(e)

    console.print("\n[green]Audio hooks configured successfully![/green]")

    if Confirm.ask("Would you like to test the audio notifications?", default=True):
        run_test(config, event=None, events=events)

    console.print("\n[green]Setup complete![/green] Audio notifications are now active.")
    console.print("Run [bold]claude-sounds --help[/bold] to see all available commands.")
