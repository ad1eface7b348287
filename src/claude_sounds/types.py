"""
Shared domain types for claude-sounds.

Enums provide exhaustiveness checking and prevent stringly-typed errors.
"""

from enum import Enum


class HookEvent(Enum):
    """Claude Code hook events that can carry an audio notification."""

    STOP = "Stop"
    NOTIFICATION = "Notification"
    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    SUBAGENT_STOP = "SubagentStop"

    @property
    def description(self) -> str:
        return EVENT_DESCRIPTIONS[self]

    @property
    def accepts_matcher(self) -> bool:
        """Only tool events scope their hooks with tool-name matchers."""
        return self in (HookEvent.PRE_TOOL_USE, HookEvent.POST_TOOL_USE)


EVENT_DESCRIPTIONS = {
    HookEvent.STOP: "when Claude finishes responding",
    HookEvent.NOTIFICATION: "when Claude needs input",
    HookEvent.PRE_TOOL_USE: "before Claude runs tools",
    HookEvent.POST_TOOL_USE: "after Claude runs tools",
    HookEvent.SUBAGENT_STOP: "when a subagent finishes",
}


class Preset(Enum):
    """Named event -> system sound bundles."""

    MINIMAL = "minimal"
    COMPLETE = "complete"
    DEVELOPMENT = "development"


class AddStatus(Enum):
    """Result status for adding an audio hook."""

    ADDED = "added"
    REPLACED = "replaced"
    EXISTS = "exists"


class TestStatus(Enum):
    """Result status for playing back a single managed hook."""

    PASS = "PASS"
    FAIL = "FAIL"
    SKIP = "SKIP"

    # Keep pytest from collecting this as a test class
    __test__ = False
