"""Tests for the claude-sounds command line."""

import json
import subprocess

import pytest
from typer.testing import CliRunner

from claude_sounds import __version__, audio
from claude_sounds.cli import app
from claude_sounds.commands import quickstart
from claude_sounds.registry import is_managed

from conftest import FOREIGN_STOP_GROUP, managed_group

runner = CliRunner()


@pytest.fixture
def cli(settings_path, home):
    """Invoke the app against the temporary settings file."""

    def _invoke(*args, input=None):
        return runner.invoke(
            app,
            ["--settings", str(settings_path), *args],
            input=input,
            env={"COLUMNS": "200"},
        )

    return _invoke


@pytest.fixture
def played(monkeypatch):
    commands = []
    monkeypatch.setattr(audio, "play", commands.append)
    return commands


def managed(settings, event):
    return [g for g in settings["hooks"].get(event, []) if is_managed(g)]


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_unknown_command(cli):
    result = cli("frobnicate")

    assert result.exit_code != 0


def test_add_sound(cli, audio_file, read_settings):
    result = cli("add-sound", "--event", "Stop", "--file", str(audio_file))

    assert result.exit_code == 0, result.output
    assert "Added audio hook for Stop event" in result.output
    assert len(managed(read_settings(), "Stop")) == 1


def test_add_sound_twice_is_a_no_op(cli, audio_file):
    cli("add-sound", "-e", "Stop", "-f", str(audio_file))

    result = cli("add-sound", "-e", "Stop", "-f", "~/sounds/done.wav")

    assert result.exit_code == 0
    assert "already exists" in result.output


def test_add_sound_multiple_events(cli, audio_file, read_settings):
    result = cli("add-sound", "--events", "Stop, Notification", "--file", str(audio_file))

    assert result.exit_code == 0, result.output
    settings = read_settings()
    assert len(managed(settings, "Stop")) == 1
    assert len(managed(settings, "Notification")) == 1


def test_add_sound_matcher(cli, audio_file, read_settings):
    result = cli("add-sound", "-e", "PreToolUse", "-f", str(audio_file), "-m", "Bash")

    assert result.exit_code == 0, result.output
    [group] = read_settings()["hooks"]["PreToolUse"]
    assert group["matchers"] == ["Bash"]


def test_add_sound_requires_file(cli):
    result = cli("add-sound", "--event", "Stop")

    assert result.exit_code == 1
    assert "--file option is required" in result.output


def test_add_sound_requires_event(cli, audio_file):
    result = cli("add-sound", "--file", str(audio_file))

    assert result.exit_code == 1
    assert "--event or --events option is required" in result.output


def test_add_sound_invalid_event(cli, audio_file):
    result = cli("add-sound", "--event", "OnSave", "--file", str(audio_file))

    assert result.exit_code == 1
    assert "Invalid event 'OnSave'" in result.output


def test_add_sound_missing_file(cli, settings_path, home):
    result = cli("add-sound", "--event", "Notification", "--file", str(home / "nope.wav"))

    assert result.exit_code == 1
    assert "Audio file not found" in result.output
    assert not settings_path.exists()


def test_malformed_settings_is_fatal(cli, settings_path, audio_file):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("{not json")

    result = cli("add-sound", "--event", "Stop", "--file", str(audio_file))

    assert result.exit_code == 1
    assert "Error parsing settings file" in result.output
    assert "backup and delete" in result.output
    assert settings_path.read_text() == "{not json"


def test_list(cli, write_settings, audio_file):
    write_settings({"hooks": {"Stop": [managed_group(audio_file, "0.1.0"), FOREIGN_STOP_GROUP]}})

    result = cli("list")

    assert result.exit_code == 0, result.output
    assert "Stop" in result.output
    assert "v0.1.0" in result.output
    assert "Found 1 other hook group(s) (preserved)" in result.output
    assert "Total claude-sounds hooks: 1" in result.output


def test_list_empty(cli):
    result = cli("list")

    assert result.exit_code == 0
    assert "No claude-sounds hooks found" in result.output


def test_remove(cli, write_settings, read_settings):
    write_settings({"hooks": {"Stop": [managed_group("/a.wav"), FOREIGN_STOP_GROUP, managed_group("/b.wav")]}})

    result = cli("remove", "Stop")

    assert result.exit_code == 0, result.output
    assert "Removed 2 claude-sounds hook(s) for Stop event" in result.output
    assert read_settings()["hooks"]["Stop"] == [FOREIGN_STOP_GROUP]


def test_remove_nothing(cli):
    result = cli("remove", "Stop")

    assert result.exit_code == 0
    assert "No claude-sounds hooks found for Stop event" in result.output


def test_remove_invalid_event(cli):
    result = cli("remove", "Start")

    assert result.exit_code == 1
    assert "Invalid event 'Start'" in result.output


def test_remove_interactive(cli, write_settings, read_settings):
    write_settings({"hooks": {"Stop": [managed_group("/a.wav")], "Notification": [managed_group("/b.wav")]}})

    result = cli("remove", input="Notification\n")

    assert result.exit_code == 0, result.output
    settings = read_settings()
    assert settings["hooks"]["Notification"] == []
    assert len(managed(settings, "Stop")) == 1


def test_clear_confirmed(cli, write_settings, read_settings):
    write_settings({"hooks": {"Stop": [managed_group("/a.wav")], "SubagentStop": [managed_group("/b.wav")]}})

    result = cli("clear", input="y\n")

    assert result.exit_code == 0, result.output
    assert "Removed 2 claude-sounds hook(s)" in result.output
    settings = read_settings()
    assert settings["hooks"]["Stop"] == []
    assert settings["hooks"]["SubagentStop"] == []


def test_clear_declined(cli, write_settings, read_settings):
    document = write_settings({"hooks": {"Stop": [managed_group("/a.wav")]}})

    result = cli("clear", input="n\n")

    assert result.exit_code == 0
    assert "Operation cancelled" in result.output
    assert read_settings() == document


def test_clear_yes_flag(cli, write_settings, read_settings):
    write_settings({"hooks": {"Stop": [managed_group("/a.wav")]}})

    result = cli("clear", "--yes")

    assert result.exit_code == 0, result.output
    assert read_settings()["hooks"]["Stop"] == []


def test_preset_invalid(cli, settings_path):
    result = cli("preset", "loud")

    assert result.exit_code == 1
    assert "Invalid preset 'loud'" in result.output
    assert not settings_path.exists()


def test_preset(cli, monkeypatch, home, read_settings):
    (home / "Tink.aiff").write_bytes(b"FORM")
    monkeypatch.setattr(
        "claude_sounds.registry.get_system_sound_path",
        lambda name, platform=None: str(home / f"{name}.aiff"),
    )

    result = cli("preset", "minimal")

    assert result.exit_code == 0, result.output
    assert "Preset 'minimal' applied successfully" in result.output
    assert len(managed(read_settings(), "Stop")) == 1


def test_test_requires_event_or_all(cli):
    result = cli("test")

    assert result.exit_code == 1
    assert "Specify an event or use --all" in result.output


def test_test_event(cli, write_settings, audio_file, played):
    write_settings({"hooks": {"Stop": [managed_group(audio_file)]}})

    result = cli("test", "Stop", "--show-command")

    assert result.exit_code == 0, result.output
    assert "PASS" in result.output
    assert "Command: afplay" in result.output
    assert played == [f'afplay "{audio_file}"']


def test_test_all_reports_failures(cli, write_settings, audio_file, home, played, monkeypatch):
    write_settings(
        {
            "hooks": {
                "Stop": [managed_group(audio_file)],
                "Notification": [managed_group(home / "gone.wav")],
            }
        }
    )
    monkeypatch.setattr("claude_sounds.diagnostics.time.sleep", lambda s: None)

    result = cli("test", "--all")

    assert result.exit_code == 1
    assert "file not found" in result.output
    assert "Success: 1" in result.output
    assert "Failed: 1" in result.output
    assert "claude-sounds doctor" in result.output


def test_test_playback_failure(cli, write_settings, audio_file, monkeypatch):
    write_settings({"hooks": {"Stop": [managed_group(audio_file)]}})

    def broken(command):
        raise subprocess.CalledProcessError(1, command)

    monkeypatch.setattr(audio, "play", broken)

    result = cli("test", "Stop")

    assert result.exit_code == 1
    assert "(playback failed)" in result.output


def test_test_dry_run(cli, write_settings, audio_file, played):
    write_settings({"hooks": {"Stop": [managed_group(audio_file)]}})

    result = cli("test", "--all", "--dry-run")

    assert result.exit_code == 0, result.output
    assert "SKIP" in result.output
    assert played == []


def test_test_no_hooks(cli):
    result = cli("test", "Stop")

    assert result.exit_code == 0
    assert "No claude-sounds hooks found to test" in result.output


def test_test_invalid_event(cli):
    result = cli("test", "Nope")

    assert result.exit_code == 1
    assert "Invalid event 'Nope'" in result.output


def test_doctor(cli, write_settings, audio_file, monkeypatch):
    write_settings({"hooks": {"Stop": [managed_group(audio_file, "0.1.0")]}})
    monkeypatch.setattr("claude_sounds.diagnostics.check_claude_installation", lambda: (False, None))
    monkeypatch.setattr("claude_sounds.diagnostics.audio.is_player_available", lambda player: True)

    result = cli("doctor")

    assert result.exit_code == 0, result.output
    assert "Not found" in result.output
    assert "1/1 valid" in result.output
    assert "PASS Stop" in result.output
    assert "Install Claude Code" in result.output


def test_doctor_renders_missing_files(cli, write_settings, home, monkeypatch):
    write_settings({"hooks": {"Stop": [managed_group(home / "gone.wav")]}})
    monkeypatch.setattr("claude_sounds.diagnostics.check_claude_installation", lambda: (True, "1.0.0"))

    result = cli("doctor")

    assert result.exit_code == 0
    assert "FAIL Stop" in result.output
    assert "Replace missing audio files" in result.output


def test_quickstart(cli, monkeypatch, audio_file, read_settings):
    monkeypatch.setattr(quickstart, "check_claude_installation", lambda: (True, "1.0.0"))
    monkeypatch.setattr(quickstart, "get_system_sounds", lambda: ["Done"])
    monkeypatch.setattr(quickstart, "get_system_sound_path", lambda name: str(audio_file))

    # Stop and Notification, skip the rest, sound #1, no test run
    result = cli(input="y\ny\nn\nn\nn\n1\nn\n")

    assert result.exit_code == 0, result.output
    assert "Setup complete" in result.output
    settings = read_settings()
    assert len(managed(settings, "Stop")) == 1
    assert len(managed(settings, "Notification")) == 1
    assert "PreToolUse" not in settings["hooks"]


def test_quickstart_custom_file(cli, monkeypatch, audio_file, read_settings, played):
    monkeypatch.setattr(quickstart, "check_claude_installation", lambda: (True, "1.0.0"))
    monkeypatch.setattr(quickstart, "get_system_sounds", lambda: ["Done"])

    # Stop only, custom file, then run the test
    result = cli(input=f"y\nn\nn\nn\nn\n0\n{audio_file}\ny\n")

    assert result.exit_code == 0, result.output
    [command] = played
    assert command.endswith(f'"{audio_file}"')
    [group] = read_settings()["hooks"]["Stop"]
    assert json.dumps(group).count("_claude_sounds") == 1


def test_quickstart_without_claude(cli, monkeypatch, settings_path):
    monkeypatch.setattr(quickstart, "check_claude_installation", lambda: (False, None))

    result = cli(input="n\n")

    assert result.exit_code == 1
    assert "Claude Code not found" in result.output
    assert not settings_path.exists()


def test_settings_from_environment(settings_path, audio_file, read_settings, monkeypatch):
    monkeypatch.setenv("CLAUDE_SOUNDS_SETTINGS", str(settings_path))

    result = runner.invoke(app, ["add-sound", "-e", "Stop", "-f", str(audio_file)])

    assert result.exit_code == 0, result.output
    assert len(managed(read_settings(), "Stop")) == 1
