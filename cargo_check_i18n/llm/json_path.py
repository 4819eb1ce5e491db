"""Dotted-path extraction of string values from decoded JSON payloads.

A path such as ``choices.0.message.content`` is evaluated one segment at a
time: all-digit segments index into lists, any other segment looks up a key in
an object. The result distinguishes an absent path from a non-string leaf.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


DEFAULT_RESPONSE_PATH = "choices.0.message.content"


class PathOutcome(Enum):
    """Outcome of evaluating a JSON path against a payload."""

    FOUND = "found"
    MISSING = "missing"
    NOT_STRING = "not_string"


@dataclass(frozen=True, slots=True)
class JsonPathResult:
    """Evaluation result carrying the extracted string when found."""

    outcome: PathOutcome
    value: str | None = None

    @property
    def found(self) -> bool:
        """Return whether a string value was extracted."""

        return self.outcome is PathOutcome.FOUND


_MISSING = JsonPathResult(PathOutcome.MISSING)


def parse_path(path: str) -> tuple[str, ...]:
    """Split a dotted path into segments; an empty path addresses the root."""

    if not path:
        return ()
    return tuple(path.split("."))


def extract_string(payload: Any, path: str = DEFAULT_RESPONSE_PATH) -> JsonPathResult:
    """Extract the string located at ``path`` inside ``payload``."""

    return _walk(payload, parse_path(path))


def _walk(node: Any, segments: tuple[str, ...]) -> JsonPathResult:
    if not segments:
        if isinstance(node, str):
            return JsonPathResult(PathOutcome.FOUND, node)
        return JsonPathResult(PathOutcome.NOT_STRING)

    head, rest = segments[0], segments[1:]
    if head.isascii() and head.isdigit():
        if not isinstance(node, list):
            return _MISSING
        index = int(head)
        if index >= len(node):
            return _MISSING
        return _walk(node[index], rest)

    if not isinstance(node, dict) or head not in node:
        return _MISSING
    return _walk(node[head], rest)
