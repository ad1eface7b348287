"""
Claude Sounds - Audio notifications for Claude Code hook events.

Components:
- Hook registry: Adds, replaces and removes watermarked hooks in ~/.claude/settings.json
- Presets: Fixed event -> system sound mappings
- Diagnostics: Validates managed hooks and plays them back on demand
"""

__version__ = "0.1.0"
