"""Exception types for claude-sounds."""

from pathlib import Path


class ClaudeSoundsError(Exception):
    """Base exception for all claude-sounds errors."""

    hint: str | None = None


class InvalidEventError(ClaudeSoundsError):
    """Raised when an event name is not one of the recognized hook events."""

    def __init__(self, event: str, valid: list[str]) -> None:
        self.event = event
        self.valid = valid
        super().__init__(f"Invalid event '{event}'. Valid events: {', '.join(valid)}")


class InvalidPresetError(ClaudeSoundsError):
    """Raised when a preset name is not recognized."""

    def __init__(self, preset: str, valid: list[str]) -> None:
        self.preset = preset
        self.valid = valid
        super().__init__(f"Invalid preset '{preset}'. Valid presets: {', '.join(valid)}")


class AudioFileNotFoundError(ClaudeSoundsError):
    """Raised when an audio file does not exist."""

    hint = "Please provide a valid audio file path."

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Audio file not found: {path}")


class ConfirmationDeclinedError(ClaudeSoundsError):
    """Raised when a destructive operation was not confirmed."""

    def __init__(self) -> None:
        super().__init__("Operation cancelled.")


class SettingsError(ClaudeSoundsError):
    """Raised when the settings file cannot be read or written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class SettingsParseError(SettingsError):
    """Raised when the settings file holds invalid JSON. Never auto-repaired."""

    hint = "Please fix the JSON syntax or backup and delete the file."

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(path, f"Error parsing settings file {path}: {detail}")


class SettingsStructureError(SettingsParseError):
    """Raised when valid JSON has an unexpected shape where hooks live."""

    hint = "Please fix the value by hand or backup and delete the file."


class SettingsReadError(SettingsError):
    """Raised when the settings file exists but cannot be read."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(path, f"Error reading settings file {path}: {detail}")
        self.hint = f"Check the permissions of {path}."


class SettingsWriteError(SettingsError):
    """Raised when the settings file could not be replaced."""

    def __init__(self, path: Path, detail: str, backup: Path | None = None) -> None:
        self.backup = backup
        super().__init__(path, f"Error writing settings file {path}: {detail}")
        self.hint = f"Check that {path.parent} is writable."
        if backup is not None:
            self.hint += f" The previous settings were kept at {backup}."
