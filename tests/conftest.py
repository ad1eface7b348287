"""Shared fixtures for claude-sounds tests."""

import json

import pytest

from claude_sounds.config import Config
from claude_sounds.registry import WATERMARK_KEY, HookRegistry
from claude_sounds.settings import SettingsStore

FOREIGN_STOP_GROUP = {
    "hooks": [{"type": "command", "command": "notify-send 'Claude finished'"}],
}
FOREIGN_TOOL_GROUP = {
    "matcher": "Bash",
    "hooks": [{"type": "command", "command": "~/.claude/hooks/guard.py", "timeout": 30}],
}


def managed_group(path, version="0.0.1"):
    """A hook group as claude-sounds would have written it."""
    return {
        "hooks": [
            {
                "type": "command",
                "command": f'afplay "{path}"',
                WATERMARK_KEY: {
                    "version": version,
                    "managed": True,
                    "created": "2025-01-01T00:00:00.000Z",
                    "id": "claude_sounds_deadbeef",
                },
            }
        ]
    }


@pytest.fixture
def home(tmp_path, monkeypatch):
    """A fake home directory so `~` expands inside tmp_path."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / ".claude" / "settings.json"


@pytest.fixture
def config(settings_path):
    return Config(settings_path=settings_path, version="9.9.9", player="afplay")


@pytest.fixture
def store(settings_path):
    return SettingsStore(settings_path)


@pytest.fixture
def registry(store, config):
    return HookRegistry(store, config)


@pytest.fixture
def audio_file(home):
    path = home / "sounds" / "done.wav"
    path.parent.mkdir()
    path.write_bytes(b"RIFF0000WAVE")
    return path


@pytest.fixture
def other_audio_file(home):
    path = home / "ping.wav"
    path.write_bytes(b"RIFF0000WAVE")
    return path


@pytest.fixture
def write_settings(settings_path):
    """Write a settings document to disk and return it."""

    def _write(document):
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        settings_path.write_text(json.dumps(document, indent=2))
        return document

    return _write


@pytest.fixture
def read_settings(settings_path):
    def _read():
        return json.loads(settings_path.read_text())

    return _read
