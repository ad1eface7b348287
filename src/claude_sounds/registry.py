"""
Hook registry - ownership-aware edits of the hooks table.

Claude Code's settings file is shared with the user and other tools. Every
hook this package writes carries a `_claude_sounds` watermark; a hook group
is ours iff one of its entries has a watermark with `managed` set. Only our
groups are ever added, replaced or removed. Foreign groups keep their
content and relative order.

Rules:
- An event holds at most one managed group. Adding a sound replaces
  whatever managed groups the event had.
- Adding a sound whose absolute path is already managed for the event is a
  no-op, so `~/a.wav` and `/home/me/a.wav` count as the same file.
"""

import logging
import re
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from claude_sounds.audio import (
    build_command,
    expand_path,
    get_system_sound_path,
    validate_audio_file,
)
from claude_sounds.config import Config
from claude_sounds.errors import (
    AudioFileNotFoundError,
    ConfirmationDeclinedError,
    InvalidEventError,
    InvalidPresetError,
)
from claude_sounds.settings import SettingsStore, get_event_hooks, set_event_hooks
from claude_sounds.types import AddStatus, HookEvent, Preset

logger = logging.getLogger(__name__)

WATERMARK_KEY = "_claude_sounds"
WATERMARK_ID_PREFIX = "claude_sounds_"

QUOTED = re.compile(r'"([^"]+)"')

PRESETS: dict[Preset, dict[HookEvent, str]] = {
    Preset.MINIMAL: {
        HookEvent.STOP: "Tink",
    },
    Preset.COMPLETE: {
        HookEvent.STOP: "Tink",
        HookEvent.NOTIFICATION: "Glass",
        HookEvent.PRE_TOOL_USE: "Ping",
        HookEvent.POST_TOOL_USE: "Pop",
        HookEvent.SUBAGENT_STOP: "Tink",
    },
    Preset.DEVELOPMENT: {
        HookEvent.PRE_TOOL_USE: "Ping",
        HookEvent.POST_TOOL_USE: "Pop",
        HookEvent.STOP: "Tink",
    },
}


# =============================================================================
# DOMAIN TYPES
# =============================================================================


@dataclass(frozen=True)
class Watermark:
    """Provenance record attached to every hook entry we create."""

    version: str
    managed: bool
    created: str
    id: str
    migrated: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "managed": self.managed,
            "created": self.created,
            "id": self.id,
        }
        if self.migrated is not None:
            data["migrated"] = self.migrated
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Watermark | None":
        """Parse a stored watermark; anything that isn't a mapping yields None."""
        if not isinstance(data, dict):
            return None
        migrated = data.get("migrated")
        return cls(
            version=str(data.get("version", "")),
            managed=data.get("managed") is True,
            created=str(data.get("created", "")),
            id=str(data.get("id", "")),
            migrated=migrated if isinstance(migrated, bool) else None,
        )


@dataclass(frozen=True)
class ManagedGroup:
    """A hook group carrying our watermark. `raw` is the stored mapping."""

    raw: dict[str, Any]

    def command_entries(self) -> list[dict[str, Any]]:
        return [h for h in self.raw["hooks"] if _is_command_entry(h)]


@dataclass(frozen=True)
class ForeignGroup:
    """Any other hook group, including malformed ones. Never modified."""

    raw: Any


HookGroup = ManagedGroup | ForeignGroup


@dataclass(frozen=True)
class AddResult:
    status: AddStatus
    event: HookEvent
    audio_file: str


@dataclass(frozen=True)
class ListedHook:
    event: HookEvent
    audio_file: str | None
    version: str


@dataclass(frozen=True)
class HookListing:
    entries: list[ListedHook]
    managed_count: int
    foreign_count: int


# =============================================================================
# PURE FUNCTIONS
# =============================================================================


def extract_audio_path(command: str) -> str | None:
    """
    Recover the audio path from a stored hook command.

    The first double-quoted substring wins; otherwise the second
    whitespace-delimited token. Every reader of stored commands goes
    through here.
    """
    match = QUOTED.search(command)
    if match:
        return match.group(1)
    parts = command.split()
    if len(parts) > 1:
        return parts[1]
    return None


def _is_command_entry(hook: Any) -> bool:
    return (
        isinstance(hook, dict)
        and hook.get("type") == "command"
        and isinstance(hook.get("command"), str)
        and bool(hook["command"])
    )


def entry_watermark(hook: Any) -> Watermark | None:
    if not isinstance(hook, dict):
        return None
    return Watermark.from_dict(hook.get(WATERMARK_KEY))


def classify_group(group: Any) -> HookGroup:
    """Tell our groups apart from everyone else's."""
    if isinstance(group, dict) and isinstance(group.get("hooks"), list):
        for hook in group["hooks"]:
            watermark = entry_watermark(hook)
            if watermark is not None and watermark.managed:
                return ManagedGroup(group)
    return ForeignGroup(group)


def is_managed(group: Any) -> bool:
    return isinstance(classify_group(group), ManagedGroup)


def partition_groups(groups: Iterable[Any]) -> tuple[list[ManagedGroup], list[ForeignGroup]]:
    """Split groups into (managed, foreign), each in original order."""
    managed: list[ManagedGroup] = []
    foreign: list[ForeignGroup] = []
    for group in groups:
        classified = classify_group(group)
        if isinstance(classified, ManagedGroup):
            managed.append(classified)
        else:
            foreign.append(classified)
    return managed, foreign


def find_by_path(groups: Iterable[Any], audio_file: str) -> dict[str, Any] | None:
    """First managed group with a command playing `audio_file`, by absolute path."""
    target = expand_path(audio_file)
    managed, _ = partition_groups(groups)
    for group in managed:
        for hook in group.command_entries():
            hook_path = extract_audio_path(hook["command"])
            if hook_path and expand_path(hook_path) == target:
                return group.raw
    return None


def create_watermark(version: str) -> Watermark:
    created = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return Watermark(
        version=version,
        managed=True,
        created=created.replace("+00:00", "Z"),
        id=f"{WATERMARK_ID_PREFIX}{uuid.uuid4().hex[:8]}",
    )


def create_audio_hook(
    event: HookEvent,
    audio_file: str,
    player: str,
    version: str,
    matcher: str | None = None,
) -> dict[str, Any]:
    """Build a new managed hook group for `event` playing `audio_file`."""
    hook = {
        "type": "command",
        "command": build_command(player, str(expand_path(audio_file))),
        WATERMARK_KEY: create_watermark(version).to_dict(),
    }
    if matcher and event.accepts_matcher:
        return {"matchers": [matcher], "hooks": [hook]}
    return {"hooks": [hook]}


def parse_event(value: "str | HookEvent") -> HookEvent:
    if isinstance(value, HookEvent):
        return value
    try:
        return HookEvent(value)
    except ValueError:
        raise InvalidEventError(value, [e.value for e in HookEvent]) from None


def parse_preset(value: "str | Preset") -> Preset:
    if isinstance(value, Preset):
        return value
    try:
        return Preset(value)
    except ValueError:
        raise InvalidPresetError(value, [p.value for p in Preset]) from None


def preset_sounds(preset: Preset, platform: str | None = None) -> dict[HookEvent, str]:
    """Event -> audio file mapping for a preset, in application order."""
    return {
        event: get_system_sound_path(sound, platform)
        for event, sound in PRESETS[preset].items()
    }


def strip_managed(settings: dict[str, Any], event: HookEvent) -> int:
    """Drop the managed groups of `event` in place. Returns how many went."""
    groups = get_event_hooks(settings, event)
    managed, foreign = partition_groups(groups)
    if managed:
        set_event_hooks(settings, event, [g.raw for g in foreign])
    return len(managed)


# =============================================================================
# REGISTRY (load -> edit -> save)
# =============================================================================


class HookRegistry:
    """Operations on the managed hooks of one settings file."""

    def __init__(self, store: SettingsStore, config: Config) -> None:
        self.store = store
        self.config = config

    @classmethod
    def from_config(cls, config: Config) -> "HookRegistry":
        return cls(SettingsStore(config.settings_path), config)

    def add(
        self,
        event: "str | HookEvent",
        audio_file: str,
        matcher: str | None = None,
    ) -> AddResult:
        """
        Make `audio_file` the one managed sound for `event`.

        Raises InvalidEventError or AudioFileNotFoundError before the
        settings file is read.
        """
        hook_event = parse_event(event)
        if not validate_audio_file(audio_file).exists:
            raise AudioFileNotFoundError(audio_file)

        settings = self.store.load()
        groups = get_event_hooks(settings, hook_event)

        if find_by_path(groups, audio_file) is not None:
            logger.info("%s already plays %s", hook_event.value, audio_file)
            return AddResult(AddStatus.EXISTS, hook_event, audio_file)

        managed, foreign = partition_groups(groups)
        new_group = create_audio_hook(
            hook_event,
            audio_file,
            player=self.config.player,
            version=self.config.version,
            matcher=matcher,
        )
        set_event_hooks(settings, hook_event, [g.raw for g in foreign] + [new_group])
        self.store.save(settings)

        status = AddStatus.REPLACED if managed else AddStatus.ADDED
        logger.info("%s audio hook for %s: %s", status.value, hook_event.value, audio_file)
        return AddResult(status, hook_event, audio_file)

    def remove(self, event: "str | HookEvent") -> int:
        """Remove every managed group of `event`. Returns the number removed."""
        hook_event = parse_event(event)
        settings = self.store.load()
        removed = strip_managed(settings, hook_event)
        if removed:
            self.store.save(settings)
        return removed

    def clear_all(self, confirm: Callable[[], bool]) -> int:
        """
        Remove managed groups from every event in one load/save.

        `confirm` is asked first; a falsy answer raises
        ConfirmationDeclinedError and nothing is read or written.
        """
        if not confirm():
            raise ConfirmationDeclinedError()

        settings = self.store.load()
        removed = sum(strip_managed(settings, event) for event in HookEvent)
        if removed:
            self.store.save(settings)
        return removed

    def list_hooks(self) -> HookListing:
        """Managed hooks across all events, plus a count of foreign groups."""
        settings = self.store.load()
        entries: list[ListedHook] = []
        managed_count = 0
        foreign_count = 0

        for event in HookEvent:
            managed, foreign = partition_groups(get_event_hooks(settings, event))
            managed_count += len(managed)
            foreign_count += len(foreign)
            for group in managed:
                for hook in group.command_entries():
                    watermark = entry_watermark(hook)
                    if watermark is None:
                        continue
                    entries.append(
                        ListedHook(
                            event=event,
                            audio_file=extract_audio_path(hook["command"]),
                            version=watermark.version,
                        )
                    )

        return HookListing(entries, managed_count, foreign_count)

    def events_with_hooks(self) -> list[HookEvent]:
        settings = self.store.load()
        return [
            event
            for event in HookEvent
            if partition_groups(get_event_hooks(settings, event))[0]
        ]

    def apply_preset(
        self,
        name: "str | Preset",
        on_result: Callable[[AddResult], None] | None = None,
    ) -> list[AddResult]:
        """
        Add each sound of a preset in order.

        The first failure propagates. Events configured before it stay
        configured.
        """
        preset = parse_preset(name)
        results = []
        for event, audio_file in preset_sounds(preset).items():
            result = self.add(event, audio_file)
            results.append(result)
            if on_result is not None:
                on_result(result)
        return results
