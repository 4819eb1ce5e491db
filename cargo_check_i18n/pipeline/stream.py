"""Per-stream diagnostic translation loop.

Responsibilities:
- Read one build-output byte stream line by line.
- Classify each escape-stripped line and resolve translations through the
  shared cache, rate limiter and client.
- Emit every line immediately, annotated when a translation applies.
"""

from __future__ import annotations

import threading
from typing import BinaryIO

from ..llm.cache import TranslationCache
from ..llm.client import TranslationClient, TranslationProviderError
from ..llm.prompts import PromptLibrary
from ..llm.rate_limiter import RateLimiter
from ..telemetry.logger import RunLogger
from ..text.classifier import should_translate, strip_ansi
from .sink import LineSink


def decode_line(raw: bytes) -> str:
    """Decode one raw output line and drop its line terminator."""

    return raw.decode("utf-8", errors="replace").rstrip("\r\n")


class StreamProcessor:
    """Translate qualifying lines of one stream and write all lines to the sink."""

    def __init__(
        self,
        *,
        name: str,
        cache: TranslationCache,
        rate_limiter: RateLimiter,
        client: TranslationClient,
        sink: LineSink,
        target_language: str,
        logger: RunLogger,
        cancel_event: threading.Event | None = None,
        prompts: PromptLibrary | None = None,
    ) -> None:
        """Bind the shared collaborators used while processing the stream."""

        self.name = name
        self.cache = cache
        self.rate_limiter = rate_limiter
        self.client = client
        self.sink = sink
        self.target_language = target_language
        self.logger = logger
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self.prompts = prompts if prompts is not None else PromptLibrary()
        self.lines_processed = 0
        self.lines_translated = 0

    def run(self, stream: BinaryIO) -> None:
        """Consume the stream until end-of-input or cancellation."""

        for raw in iter(stream.readline, b""):
            if self.cancel_event.is_set():
                break
            self.sink.write_line(self.process_line(decode_line(raw)))

    def process_line(self, line: str) -> str:
        """Return the output text for one decoded line."""

        self.lines_processed += 1
        clean = strip_ansi(line)
        if not should_translate(clean):
            return line

        key = clean.strip()
        translation = self.cache.resolve(key, lambda: self._translate(key))
        self.lines_translated += 1
        return f"{line} ({translation})"

    def _translate(self, key: str) -> str | None:
        """Fetch one translation, returning `None` when the provider fails."""

        prompt = self.prompts.translate_diagnostic_prompt(key, self.target_language)
        self.rate_limiter.wait()
        try:
            return self.client.translate(prompt)
        except TranslationProviderError as exc:
            self.logger.log_translation_failure(
                exc.failure_kind,
                status_code=exc.status_code,
                endpoint=exc.endpoint,
            )
            return None
