"""
Test command - play back managed hooks to check they work.
"""

import typer

from claude_sounds.config import Config
from claude_sounds.diagnostics import HookTestResult, TestReport, run_hook_tests
from claude_sounds.errors import ClaudeSoundsError
from claude_sounds.output import console, fail
from claude_sounds.registry import parse_event
from claude_sounds.settings import SettingsStore
from claude_sounds.types import HookEvent, TestStatus

STATUS_STYLE = {
    TestStatus.PASS: "green",
    TestStatus.FAIL: "red",
    TestStatus.SKIP: "blue",
}


def print_result(result: HookTestResult, verbose: bool, show_command: bool) -> None:
    style = STATUS_STYLE[result.status]
    target = result.check.audio_file or result.check.command
    line = f"  [{style}]{result.status.value}[/{style}] {target}"
    detail = result.error
    if detail and detail.startswith("playback failed") and not verbose:
        detail = "playback failed"
    if detail:
        line += f" ({detail})"
    console.print(line, highlight=False)
    if show_command:
        console.print(f"  [dim]Command: {result.check.command}[/dim]", highlight=False)


def print_summary(report: TestReport) -> None:
    console.print("\n[bold]Test Results:[/bold]")
    console.print(f"  [green]Success: {report.success}[/green]")
    if report.failed:
        console.print(f"  [red]Failed: {report.failed}[/red]")
    console.print(f"  Events tested: {len(report.events_tested)}")
    if report.failed:
        console.print("\n[yellow]Run 'claude-sounds doctor' for detailed diagnostics.[/yellow]")


def run_test(
    config: Config,
    event: str | None,
    all_events: bool = False,
    verbose: bool = False,
    dry_run: bool = False,
    show_command: bool = False,
    delay_ms: int = 1000,
    events: list[HookEvent] | None = None,
) -> None:
    """
    Test one event's hooks, or every event's with `all_events`.

    Exits 1 when any hook failed.
    """
    try:
        if all_events or events:
            targets = events or list(HookEvent)
        elif event is not None:
            targets = [parse_event(event)]
        else:
            console.print("[red]Error:[/red] Specify an event or use --all")
            raise typer.Exit(1)

        settings = SettingsStore(config.settings_path).load()
    except ClaudeSoundsError as e:
        fail(e)

    label = targets[0].value if len(targets) == 1 else "all"
    console.print(f"\n[bold]Testing {label} claude-sounds hooks...[/bold]\n")

    current: list[HookEvent] = []

    def on_result(result: HookTestResult) -> None:
        if result.check.event not in current:
            current.append(result.check.event)
            console.print(f"[cyan]{result.check.event.value}:[/cyan]")
        print_result(result, verbose, show_command)

    report = run_hook_tests(
        settings,
        targets,
        dry_run=dry_run,
        delay_ms=delay_ms,
        on_result=on_result,
    )

    if not report.results:
        console.print("[dim]No claude-sounds hooks found to test.[/dim]")
        if len(targets) == 1:
            console.print(
                f"Run [bold]claude-sounds add-sound --event {targets[0].value} --file <audio-file>[/bold] to add one."
            )
        else:
            console.print("Run [bold]claude-sounds[/bold] to set up audio notifications.")
        return

    print_summary(report)
    if not report.ok:
        raise typer.Exit(1)
