"""Consolidated line output shared by both stream workers."""

from __future__ import annotations

import sys
import threading
from typing import TextIO


class LineSink:
    """Write whole lines to one text stream, flushing after each line."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Bind the sink to `stream`, defaulting to standard output."""

        self._stream = stream if stream is not None else sys.stdout
        self._lock = threading.Lock()

    def write_line(self, line: str) -> None:
        """Write `line` plus a newline and flush before releasing the lock."""

        with self._lock:
            self._stream.write(f"{line}\n")
            self._stream.flush()
