"""Deterministic classification of build-tool diagnostic lines.

Responsibilities:
- Remove terminal escape sequences from raw diagnostic lines.
- Decide whether a cleaned line carries translatable prose or only code-frame
  decoration (gutters, carets, location arrows, status lines).
"""

from __future__ import annotations

import re


_ANSI_ESCAPE_PATTERN = re.compile(
    r"""
    \x1b\[[0-?]*[ -/]*[@-~]              # CSI: colors, cursor movement
    | \x1b\][^\x07\x1b]*(?:\x07|\x1b\\)  # OSC: hyperlinks, titles
    | \x1b[@-Z\\-_]                      # two-byte escapes
    """,
    re.VERBOSE,
)

_STATUS_PREFIXES = ("compiling", "checking", "finished", "-->")
_DIAGNOSTIC_KEYWORDS = ("error", "warning", "note", "help")
_MIN_PROSE_LENGTH = 15
_MAX_PROSE_LENGTH = 120


def strip_ansi(text: str) -> str:
    """Return text with ANSI escape sequences removed."""

    return _ANSI_ESCAPE_PATTERN.sub("", text)


def should_translate(line: str) -> bool:
    """Return whether an escape-stripped line should be translated.

    Status lines, location arrows and code-frame gutters are excluded. Lines
    mentioning a diagnostic keyword are included, as are other mid-length lines
    containing letters.
    """

    trimmed = line.strip()
    lowered = trimmed.lower()
    if lowered.startswith(_STATUS_PREFIXES):
        return False
    if trimmed[:1].isdigit() and trimmed[:1].isascii() and "|" in trimmed:
        return False
    if trimmed == "|":
        return False

    pipe_index = line.find("|")
    if pipe_index >= 0:
        marker = line[pipe_index + 1 :].lstrip()
        if not marker.startswith(("-", "^")):
            return False

    if any(keyword in lowered for keyword in _DIAGNOSTIC_KEYWORDS):
        return True
    return _MIN_PROSE_LENGTH < len(line) < _MAX_PROSE_LENGTH and any(
        character.isalpha() for character in line
    )
