"""
Path constants for claude-sounds.

Audio hooks are user preferences, so they always live in the global
~/.claude/settings.json. Per-project settings.local.json files are never touched.
"""

from pathlib import Path

# Base directories
CLAUDE_HOME = Path.home() / ".claude"

# Settings file (Claude Code's global settings)
SETTINGS_GLOBAL = CLAUDE_HOME / "settings.json"

# Sibling files used while rewriting the settings file
BACKUP_SUFFIX = ".backup"
TEMP_SUFFIX = ".tmp"


def sibling(path: Path, suffix: str) -> Path:
    """Return `path` with `suffix` appended to its full file name."""
    return path.with_name(path.name + suffix)
