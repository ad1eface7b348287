"""
Runtime configuration for claude-sounds.

A Config is built once by the CLI and handed to every component that needs
it. The package version stamped into watermarks travels here rather than
being read from global state.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from claude_sounds import __version__
from claude_sounds.audio import get_audio_player
from claude_sounds.paths import SETTINGS_GLOBAL

SETTINGS_ENV = "CLAUDE_SOUNDS_SETTINGS"
LOG_LEVEL_ENV = "CLAUDE_SOUNDS_LOG_LEVEL"


@dataclass(frozen=True)
class Config:
    """Explicit configuration for the registry, store and diagnostics."""

    settings_path: Path = SETTINGS_GLOBAL
    version: str = __version__
    player: str = field(default_factory=get_audio_player)

    @classmethod
    def from_env(cls, settings_path: Path | None = None) -> "Config":
        """Build a config, preferring an explicit path over the environment."""
        if settings_path is None and os.environ.get(SETTINGS_ENV):
            settings_path = Path(os.environ[SETTINGS_ENV])
        if settings_path is None:
            return cls()
        return cls(settings_path=settings_path.expanduser())
