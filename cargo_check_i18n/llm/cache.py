"""File-backed translation cache shared by the stream workers.

Responsibilities:
- Map trimmed, escape-stripped diagnostic text to its translation.
- Load the map once from a JSON file and rewrite it after every insertion.
- Collapse concurrent misses for the same key into one external request while
  letting distinct keys resolve in parallel.
- Track basic cache telemetry (hits/misses) for the run summary.
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
import json
import os
from pathlib import Path
import tempfile
import threading
from typing import Callable


FAILURE_SENTINEL = "Translation failed."


def normalize_translation(text: str) -> str:
    """Trim a translation and join its lines with single spaces."""

    return " ".join(line.rstrip() for line in text.strip().splitlines())


def load_entries(path: Path) -> dict[str, str]:
    """Load a flat string map from disk; missing or malformed files yield `{}`."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return {}
    if not isinstance(payload, dict):
        return {}
    if not all(isinstance(key, str) and isinstance(value, str) for key, value in payload.items()):
        return {}
    return payload


def save_entries(path: Path, entries: dict[str, str]) -> None:
    """Atomically write a string map as a pretty-printed JSON object."""

    path.parent.mkdir(parents=True, exist_ok=True)
    file_descriptor, temp_name = tempfile.mkstemp(
        prefix=f"{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(file_descriptor, "w", encoding="utf-8") as handle:
            json.dump(entries, handle, ensure_ascii=False, indent=2)
            handle.write("\n")
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise


@dataclass(slots=True)
class TranslationCache:
    """Diagnostic-text to translation map with single-flight miss resolution."""

    path: Path
    entries: dict[str, str] = field(default_factory=dict)
    hits: int = 0
    misses: int = 0
    on_persist_error: Callable[[OSError], None] | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _in_flight: dict[str, Future[str | None]] = field(default_factory=dict, repr=False)

    @classmethod
    def load(
        cls,
        path: Path,
        on_persist_error: Callable[[OSError], None] | None = None,
    ) -> TranslationCache:
        """Create a cache populated from `path`, or empty when unreadable."""

        return cls(path=path, entries=load_entries(path), on_persist_error=on_persist_error)

    def get(self, key: str) -> str | None:
        """Return a stored translation without touching telemetry counters."""

        with self._lock:
            return self.entries.get(key)

    def resolve(self, key: str, compute: Callable[[], str | None]) -> str:
        """Return the translation for `key`, computing it once on a miss.

        `compute` returns `None` for a failed translation. Failures are never
        stored, so the same key is retried on its next encounter.
        Callers joining an in-flight request count as hits.
        """

        with self._lock:
            cached = self.entries.get(key)
            if cached is not None:
                self.hits += 1
                return cached
            pending = self._in_flight.get(key)
            if pending is None:
                self.misses += 1
                pending = Future()
                self._in_flight[key] = pending
                is_leader = True
            else:
                self.hits += 1
                is_leader = False

        if not is_leader:
            outcome = pending.result()
            return outcome if outcome is not None else FAILURE_SENTINEL

        try:
            computed = compute()
        except BaseException as exc:
            with self._lock:
                self._in_flight.pop(key, None)
            pending.set_exception(exc)
            raise

        stored = normalize_translation(computed) if computed is not None else None
        with self._lock:
            self._in_flight.pop(key, None)
            if stored is not None:
                self.entries[key] = stored
                self._persist_locked()
        pending.set_result(stored)
        return stored if stored is not None else FAILURE_SENTINEL

    def hit_rate(self) -> float:
        """Return cache hit rate for current cache lifecycle."""

        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / float(total)

    def _persist_locked(self) -> None:
        """Write the whole map to disk; caller holds the lock."""

        try:
            save_entries(self.path, self.entries)
        except OSError as exc:
            if self.on_persist_error is None:
                raise
            self.on_persist_error(exc)
