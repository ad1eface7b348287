"""
Doctor command - environment and hook diagnostics.
"""

from rich.table import Table

from claude_sounds.config import Config
from claude_sounds.diagnostics import DiagnosticReport, run_diagnostics
from claude_sounds.errors import ClaudeSoundsError
from claude_sounds.output import console, fail
from claude_sounds.settings import SettingsStore


def yes_no(ok: bool, yes: str = "Yes", no: str = "No") -> str:
    return f"[green]{yes}[/green]" if ok else f"[red]{no}[/red]"


def render_report(report: DiagnosticReport) -> None:
    table = Table(title="Claude Sounds Diagnostics")
    table.add_column("Check", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Details", style="dim")

    table.add_row(
        "Claude Code",
        yes_no(report.claude_installed, "Installed", "Not found"),
        report.claude_version or "",
    )
    table.add_row(
        "Settings file",
        yes_no(report.settings_writable, "Writable", "Not writable"),
        report.settings_path,
    )
    table.add_row(
        "Audio player",
        yes_no(report.player_available, "Available", "Not available"),
        report.player,
    )

    total = len(report.hooks)
    valid = total - len(report.invalid_hooks)
    if total:
        hooks_status = yes_no(valid == total, f"{valid}/{total} valid", f"{valid}/{total} valid")
    else:
        hooks_status = "[yellow]None configured[/yellow]"
    table.add_row("Managed hooks", hooks_status, "")

    console.print()
    console.print(table)

    if report.hooks:
        console.print("\n[bold]Managed hooks:[/bold]")
        for hook in report.hooks:
            status = "[green]PASS[/green]" if hook.exists else "[red]FAIL[/red]"
            version = f" (claude-sounds v{hook.version})" if hook.version else ""
            console.print(f"  {status} {hook.event.value}: {hook.audio_file}{version}", highlight=False)
            if not hook.exists:
                console.print(f"       [dim]file not found: {hook.audio_file}[/dim]", highlight=False)

    if report.recommendations:
        console.print("\n[bold]Recommendations:[/bold]")
        for rec in report.recommendations:
            console.print(f"  [dim]{rec}[/dim]", highlight=False)

    console.print()


def run_doctor(config: Config) -> None:
    """Run diagnostics and print the report."""
    try:
        report = run_diagnostics(config, SettingsStore(config.settings_path))
    except ClaudeSoundsError as e:
        fail(e)
    render_report(report)
