"""
Platform audio helpers.

Player selection, system sound lookup, audio file validation and playback.
Playback shells out to the same command string that is stored in the
settings file, so a test run exercises exactly what Claude Code will run.
"""

import logging
import os
import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

WINDOWS_PLAYER = "powershell -c \"(New-Object Media.SoundPlayer '%s').PlaySync();\""

MACOS_SOUNDS_DIR = Path("/System/Library/Sounds")
LINUX_SOUNDS_DIR = Path("/usr/share/sounds/alsa")

MACOS_FALLBACK_SOUNDS = [
    "Basso", "Blow", "Bottle", "Frog", "Funk", "Glass", "Hero",
    "Morse", "Ping", "Pop", "Purr", "Sosumi", "Submarine", "Tink",
]


@dataclass(frozen=True)
class AudioValidation:
    """Outcome of checking an audio file path."""

    exists: bool
    path: str
    error: str | None = None


def _platform(platform: str | None) -> str:
    return platform or sys.platform


def expand_path(path: str) -> Path:
    """Expand a leading ~ and make the path absolute. Symlinks are kept as given."""
    return Path(os.path.abspath(Path(path).expanduser()))


def validate_audio_file(audio_file: str) -> AudioValidation:
    """Resolve `audio_file` and check that it exists."""
    if not audio_file.strip():
        return AudioValidation(exists=False, path=audio_file, error="No path given")
    resolved = expand_path(audio_file)
    if resolved.exists():
        return AudioValidation(exists=True, path=str(resolved))
    return AudioValidation(exists=False, path=audio_file, error=f"No such file: {resolved}")


def get_audio_player(platform: str | None = None) -> str:
    """Player command (or command template) for the current platform."""
    current = _platform(platform)
    if current == "darwin":
        return "afplay"
    if current.startswith("linux"):
        return "aplay"
    if current == "win32":
        return WINDOWS_PLAYER
    return "afplay"


def build_command(player: str, audio_path: str) -> str:
    """Build the shell command that plays `audio_path`."""
    if "%s" in player:
        return player.replace("%s", audio_path)
    return f'{player} "{audio_path}"'


def player_binary(player: str) -> str:
    """First token of a player command, e.g. 'afplay' or 'powershell'."""
    return shlex.split(player, posix=False)[0]


def is_player_available(player: str) -> bool:
    return shutil.which(player_binary(player)) is not None


def get_system_sounds(platform: str | None = None) -> list[str]:
    """Names of the sounds that ship with the operating system."""
    current = _platform(platform)
    if current == "darwin":
        sounds = sorted(p.stem for p in MACOS_SOUNDS_DIR.glob("*.aiff"))
        return sounds or list(MACOS_FALLBACK_SOUNDS)
    if current.startswith("linux"):
        return ["bell", "beep", "click"]
    if current == "win32":
        return ["SystemAsterisk", "SystemExclamation", "SystemNotification", "SystemQuestion"]
    return ["Tink", "Glass", "Ping"]


def get_system_sound_path(sound_name: str, platform: str | None = None) -> str:
    """Path of a named system sound. Windows uses bare sound names."""
    current = _platform(platform)
    if current.startswith("linux"):
        return str(LINUX_SOUNDS_DIR / f"{sound_name}.wav")
    if current == "win32":
        return sound_name
    return str(MACOS_SOUNDS_DIR / f"{sound_name}.aiff")


def play(command: str) -> None:
    """
    Run a stored hook command and wait for playback to finish.

    Raises subprocess.CalledProcessError on a non-zero exit and OSError when
    the shell cannot be started. A KeyboardInterrupt kills the child first.
    """
    logger.debug("Playing: %s", command)
    subprocess.run(
        command,
        shell=True,
        check=True,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
