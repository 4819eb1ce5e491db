"""Pipeline orchestration for one translated `cargo check` run.

Responsibilities:
- Build the shared cache, rate limiter and client from one config snapshot.
- Run one stream worker per child output stream and join both.
- Report the child's exit status as the pipeline result.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
import subprocess
import threading
from typing import Callable, Sequence

from ..config import CheckConfig, cache_path_for
from ..llm.cache import TranslationCache
from ..llm.client import TranslationClient
from ..llm.rate_limiter import RateLimiter
from ..telemetry.logger import RunLogger
from .sink import LineSink
from .stream import StreamProcessor
from .supervisor import spawn_build


class CheckPipeline:
    """Translate the diagnostics of a supervised build and mirror its exit code."""

    def __init__(
        self,
        config: CheckConfig,
        *,
        sink: LineSink | None = None,
        logger: RunLogger | None = None,
        client: TranslationClient | None = None,
        rate_limiter: RateLimiter | None = None,
        spawner: Callable[[Path, Sequence[str]], subprocess.Popen[bytes]] = spawn_build,
    ) -> None:
        """Initialize pipeline collaborators from a read-only config snapshot."""

        self.config = config
        self.sink = sink if sink is not None else LineSink()
        self.logger = logger if logger is not None else RunLogger()
        self.client = client if client is not None else TranslationClient(config)
        self.rate_limiter = (
            rate_limiter if rate_limiter is not None else RateLimiter.from_rate(config.rate_limit)
        )
        self.spawner = spawner
        self.cancel_event = threading.Event()

    def run(self, project_dir: Path, cargo_args: Sequence[str] = ()) -> int:
        """Run `cargo check` in `project_dir` and return its exit code."""

        cache = TranslationCache.load(
            cache_path_for(project_dir),
            on_persist_error=lambda exc: self.logger.log_stage_failure(
                "cache", type(exc).__name__
            ),
        )
        self.logger.log_stage_start("check", project=project_dir)
        child = self.spawner(project_dir, cargo_args)

        processors = [
            self._processor("stdout", cache),
            self._processor("stderr", cache),
        ]
        streams = [child.stdout, child.stderr]
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="i18n-stream")
        try:
            futures = [
                executor.submit(processor.run, stream)
                for processor, stream in zip(processors, streams)
            ]
            try:
                wait(futures)
            except KeyboardInterrupt:
                self.cancel_event.set()
                child.terminate()
                self.logger.log_stage_failure("check", "KeyboardInterrupt")
        finally:
            executor.shutdown(wait=True)
            for stream in streams:
                if stream is not None:
                    stream.close()

        returncode = child.wait()
        # Killed by a signal: Popen reports -signum.
        exit_code = returncode if returncode >= 0 else 1
        for future in futures:
            future.result()
        self.logger.log_cache_summary(cache.hits, cache.misses, cache.hit_rate())
        self.logger.log_stage_complete("check", exit_code=exit_code, returncode=returncode)
        return exit_code

    def _processor(self, name: str, cache: TranslationCache) -> StreamProcessor:
        """Build one stream worker sharing the run-wide collaborators."""

        return StreamProcessor(
            name=name,
            cache=cache,
            rate_limiter=self.rate_limiter,
            client=self.client,
            sink=self.sink,
            target_language=self.config.language,
            logger=self.logger,
            cancel_event=self.cancel_event,
        )
