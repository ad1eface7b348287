"""
Claude Code settings.json management.

Handles reading/writing the global settings file that holds hook
registrations. The file belongs to Claude Code: everything this module
does not understand is carried through unchanged.
"""

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any

from claude_sounds.errors import (
    SettingsParseError,
    SettingsReadError,
    SettingsStructureError,
    SettingsWriteError,
)
from claude_sounds.paths import BACKUP_SUFFIX, TEMP_SUFFIX, sibling
from claude_sounds.types import HookEvent

logger = logging.getLogger(__name__)

SETTINGS_MODE = 0o644


def default_settings() -> dict[str, Any]:
    return {"hooks": {}}


class SettingsStore:
    """Whole-file read and atomic write of one settings file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def backup_path(self) -> Path:
        return sibling(self.path, BACKUP_SUFFIX)

    @property
    def temp_path(self) -> Path:
        return sibling(self.path, TEMP_SUFFIX)

    def load(self) -> dict[str, Any]:
        """
        Load the settings document.

        A missing file is created with an empty hooks table. Invalid JSON,
        or a `hooks` value this tool cannot edit without losing data,
        raises SettingsParseError and leaves the file as it is.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            if not self.path.exists():
                logger.info("Settings file %s not found, creating it", self.path)
                settings = default_settings()
                self.save(settings)
                return settings

            settings = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SettingsParseError(self.path, str(e)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise SettingsReadError(self.path, str(e)) from e

        if not isinstance(settings, dict):
            raise SettingsParseError(self.path, "top-level value is not a JSON object")

        problem = hooks_structure_problem(settings)
        if problem:
            raise SettingsStructureError(self.path, problem)

        return ensure_hooks_structure(settings)

    def save(self, settings: dict[str, Any]) -> None:
        """
        Replace the settings file atomically.

        The current file is copied to a .backup sibling, the new content is
        written to a .tmp sibling and renamed over the target, then the
        backup is removed. On failure the .tmp file is removed and the
        backup is kept.
        """
        backup = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            if self.path.exists():
                shutil.copy2(self.path, self.backup_path)
                backup = self.backup_path

            self.temp_path.write_text(
                json.dumps(settings, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
            self.temp_path.chmod(SETTINGS_MODE)
            os.replace(self.temp_path, self.path)
        except OSError as e:
            self.temp_path.unlink(missing_ok=True)
            raise SettingsWriteError(self.path, str(e), backup=backup) from e

        if backup is not None:
            backup.unlink(missing_ok=True)
        logger.debug("Saved settings to %s", self.path)


def hooks_structure_problem(settings: dict[str, Any]) -> str | None:
    """
    Describe why `settings["hooks"]` can't be edited safely, or None.

    A missing `hooks` key is fine. A present one must be an object, and
    each recognized event under it must hold a list of groups.
    """
    if "hooks" not in settings:
        return None
    hooks = settings["hooks"]
    if not isinstance(hooks, dict):
        return '"hooks" is not a JSON object'
    for event in HookEvent:
        if event.value in hooks and not isinstance(hooks[event.value], list):
            return f'"hooks.{event.value}" is not a JSON array'
    return None


def ensure_hooks_structure(settings: dict[str, Any]) -> dict[str, Any]:
    """Add an empty hooks table if there is none."""
    settings.setdefault("hooks", {})
    return settings


def get_event_hooks(settings: dict[str, Any], event: HookEvent) -> list[Any]:
    """Hook groups registered for `event` (empty list if none)."""
    return ensure_hooks_structure(settings)["hooks"].get(event.value, [])


def set_event_hooks(settings: dict[str, Any], event: HookEvent, groups: list[Any]) -> None:
    ensure_hooks_structure(settings)["hooks"][event.value] = groups
