"""
Read-only checks over the managed hooks: validation, playback tests and
the doctor report.
"""

import logging
import os
import subprocess
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from claude_sounds import audio
from claude_sounds.config import Config
from claude_sounds.registry import (
    entry_watermark,
    extract_audio_path,
    partition_groups,
)
from claude_sounds.settings import SettingsStore, get_event_hooks
from claude_sounds.types import HookEvent, TestStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HookCheck:
    """One command entry of a managed group and whether its file exists."""

    event: HookEvent
    audio_file: str | None
    command: str
    version: str | None
    exists: bool


@dataclass(frozen=True)
class HookTestResult:
    check: HookCheck
    status: TestStatus
    error: str | None = None

    __test__ = False


@dataclass
class TestReport:
    results: list[HookTestResult] = field(default_factory=list)

    __test__ = False

    @property
    def success(self) -> int:
        return sum(1 for r in self.results if r.status is not TestStatus.FAIL)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status is TestStatus.FAIL)

    @property
    def events_tested(self) -> list[HookEvent]:
        seen: list[HookEvent] = []
        for r in self.results:
            if r.check.event not in seen:
                seen.append(r.check.event)
        return seen

    @property
    def ok(self) -> bool:
        return self.failed == 0


@dataclass(frozen=True)
class DiagnosticReport:
    claude_installed: bool
    claude_version: str | None
    settings_path: str
    settings_writable: bool
    player: str
    player_available: bool
    hooks: list[HookCheck]
    recommendations: list[str]

    @property
    def invalid_hooks(self) -> list[HookCheck]:
        return [h for h in self.hooks if not h.exists]


def scan_managed_hooks(
    settings: dict[str, Any],
    events: Iterable[HookEvent] | None = None,
) -> list[HookCheck]:
    """Every command entry of every managed group, with its file checked."""
    checks = []
    for event in events or HookEvent:
        managed, _ = partition_groups(get_event_hooks(settings, event))
        for group in managed:
            for hook in group.command_entries():
                audio_file = extract_audio_path(hook["command"])
                watermark = entry_watermark(hook)
                exists = bool(audio_file) and audio.validate_audio_file(audio_file).exists
                checks.append(
                    HookCheck(
                        event=event,
                        audio_file=audio_file,
                        command=hook["command"],
                        version=watermark.version if watermark else None,
                        exists=exists,
                    )
                )
    return checks


def run_hook_tests(
    settings: dict[str, Any],
    events: Iterable[HookEvent] | None = None,
    dry_run: bool = False,
    delay_ms: int = 0,
    play: Callable[[str], None] | None = None,
    sleep: Callable[[float], None] | None = None,
    on_result: Callable[[HookTestResult], None] | None = None,
) -> TestReport:
    """
    Play back each managed hook in turn.

    A command with no audio path, a missing file or a failed playback is
    recorded as FAIL and the run carries on. Dry runs record SKIP without touching the player.
    """
    play = play or audio.play
    sleep = sleep or time.sleep
    report = TestReport()
    played = 0

    for check in scan_managed_hooks(settings, events):
        if not check.audio_file:
            result = HookTestResult(check, TestStatus.FAIL, "no audio path")
        elif not check.exists:
            result = HookTestResult(check, TestStatus.FAIL, "file not found")
        elif dry_run:
            result = HookTestResult(check, TestStatus.SKIP, "dry run")
        else:
            if played and delay_ms > 0:
                sleep(delay_ms / 1000)
            played += 1
            try:
                play(check.command)
            except (subprocess.CalledProcessError, OSError) as e:
                logger.debug("Playback failed for %s: %s", check.audio_file, e)
                result = HookTestResult(check, TestStatus.FAIL, f"playback failed: {e}")
            else:
                result = HookTestResult(check, TestStatus.PASS)

        report.results.append(result)
        if on_result is not None:
            on_result(result)

    return report


def check_claude_installation() -> tuple[bool, str | None]:
    """Return (installed, version) by asking the `claude` binary."""
    try:
        proc = subprocess.run(
            ["claude", "--version"],
            capture_output=True,
            text=True,
            check=True,
            timeout=10,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("claude --version failed: %s", e)
        return False, None
    return True, proc.stdout.strip()


def settings_writable(store: SettingsStore) -> bool:
    """Writable if the file is, or if it doesn't exist yet and its directory is."""
    if store.path.exists():
        return os.access(store.path, os.W_OK)
    parent = store.path.parent
    while not parent.exists() and parent != parent.parent:
        parent = parent.parent
    return os.access(parent, os.W_OK)


def recommendations_for(
    claude_installed: bool,
    player: str,
    player_available: bool,
    hooks: list[HookCheck],
) -> list[str]:
    recommendations = []
    invalid = [h for h in hooks if not h.exists]

    if not claude_installed:
        recommendations.append("Install Claude Code: npm install -g @anthropic-ai/claude-code")
    if not player_available:
        recommendations.append(f"Install audio player: {audio.player_binary(player)}")
    if invalid:
        recommendations.append("Replace missing audio files or reconfigure hooks")
    if not hooks:
        recommendations.append("Configure audio hooks with: claude-sounds")
    elif len(hooks) == 1 and not invalid:
        recommendations.append("Consider adding more events for better workflow feedback")

    return recommendations


def run_diagnostics(config: Config, store: SettingsStore) -> DiagnosticReport:
    """Gather everything `doctor` reports. Reads the settings file once."""
    installed, version = check_claude_installation()
    writable = settings_writable(store)
    player_available = audio.is_player_available(config.player)

    hooks = scan_managed_hooks(store.load())

    return DiagnosticReport(
        claude_installed=installed,
        claude_version=version,
        settings_path=str(store.path),
        settings_writable=writable,
        player=config.player,
        player_available=player_available,
        hooks=hooks,
        recommendations=recommendations_for(installed, config.player, player_available, hooks),
    )
