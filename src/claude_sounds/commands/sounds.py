"""
Sound hook commands - add, list, remove, clear and presets.
"""

from rich.prompt import Confirm, Prompt
from rich.table import Table

from claude_sounds.config import Config
from claude_sounds.errors import ClaudeSoundsError, ConfirmationDeclinedError
from claude_sounds.output import console, fail
from claude_sounds.registry import AddResult, HookRegistry, parse_event, parse_preset
from claude_sounds.types import AddStatus


def print_add_result(result: AddResult) -> None:
    event = result.event.value
    if result.status is AddStatus.EXISTS:
        console.print(
            f"[dim]○[/dim] Audio hook already exists for {event} event with file: {result.audio_file}"
        )
    elif result.status is AddStatus.REPLACED:
        console.print(f"[green]✓[/green] Replaced existing audio hook for {event} event: {result.audio_file}")
    else:
        console.print(f"[green]✓[/green] Added audio hook for {event} event: {result.audio_file}")


def run_add_sound(
    config: Config,
    events: list[str],
    audio_file: str,
    matcher: str | None = None,
) -> None:
    """Add `audio_file` to each event in turn. Stops at the first error."""
    registry = HookRegistry.from_config(config)
    for event in events:
        try:
            result = registry.add(event, audio_file, matcher=matcher)
        except ClaudeSoundsError as e:
            fail(e)
        print_add_result(result)


def run_list(config: Config) -> None:
    """Show all managed hooks."""
    try:
        listing = HookRegistry.from_config(config).list_hooks()
    except ClaudeSoundsError as e:
        fail(e)

    if not listing.entries:
        console.print("[dim]No claude-sounds hooks found.[/dim]")
        console.print("Run [bold]claude-sounds[/bold] to set up audio notifications.")
    else:
        table = Table(title="Claude Sounds Hooks")
        table.add_column("Event", style="cyan")
        table.add_column("Audio File")
        table.add_column("Version", style="dim")

        for entry in listing.entries:
            table.add_row(entry.event.value, entry.audio_file or "[red]?[/red]", f"v{entry.version}")

        console.print()
        console.print(table)

    if listing.foreign_count:
        console.print(f"\n[dim]Found {listing.foreign_count} other hook group(s) (preserved)[/dim]")

    console.print(f"\nTotal claude-sounds hooks: {listing.managed_count}")
    console.print()


def run_remove(config: Config, event: str | None) -> None:
    """Remove managed hooks for one event, prompting for it if not given."""
    registry = HookRegistry.from_config(config)
    try:
        if event is None:
            event = prompt_event_to_remove(registry)
            if event is None:
                return
        hook_event = parse_event(event)
        removed = registry.remove(hook_event)
    except ClaudeSoundsError as e:
        fail(e)

    if removed:
        console.print(f"[green]✓[/green] Removed {removed} claude-sounds hook(s) for {hook_event.value} event")
    else:
        console.print(f"[dim]○[/dim] No claude-sounds hooks found for {hook_event.value} event")


def prompt_event_to_remove(registry: HookRegistry) -> str | None:
    events = registry.events_with_hooks()
    if not events:
        console.print("[dim]No claude-sounds hooks found to remove.[/dim]")
        console.print("Run [bold]claude-sounds[/bold] to set up audio notifications.")
        return None

    console.print("\n[bold]Remove claude-sounds hooks[/bold]\n")
    for event in events:
        console.print(f"  [cyan]{event.value}[/cyan] ({event.description})")
    return Prompt.ask(
        "\nWhich event would you like to remove hooks for?",
        choices=[e.value for e in events],
        default=events[0].value,
    )


def run_clear(config: Config, assume_yes: bool = False) -> None:
    """Remove every managed hook after confirmation."""

    def confirm() -> bool:
        if assume_yes:
            return True
        return Confirm.ask("Are you sure you want to remove ALL claude-sounds hooks?", default=False)

    try:
        removed = HookRegistry.from_config(config).clear_all(confirm)
    except ConfirmationDeclinedError:
        console.print("[yellow]![/yellow] Operation cancelled.")
        return
    except ClaudeSoundsError as e:
        fail(e)

    if removed:
        console.print(f"[green]✓[/green] Removed {removed} claude-sounds hook(s)")
    else:
        console.print("[dim]○[/dim] No claude-sounds hooks found")


def run_preset(config: Config, name: str) -> None:
    """Apply a preset, stopping at the first event that fails."""
    try:
        preset = parse_preset(name)
    except ClaudeSoundsError as e:
        fail(e)

    console.print(f"\n[bold]Applying '{preset.value}' preset...[/bold]\n")
    try:
        HookRegistry.from_config(config).apply_preset(preset, on_result=print_add_result)
    except ClaudeSoundsError as e:
        fail(e)

    console.print(f"\n[green]Preset '{preset.value}' applied successfully![/green]\n")
