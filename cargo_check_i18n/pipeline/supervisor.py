"""Supervised `cargo check` process.

Responsibilities:
- Spawn the build tool with forced color output in the project directory.
- Expose its stdout/stderr byte streams and its exit status.
"""

from __future__ import annotations

from pathlib import Path
import subprocess
from typing import Sequence

from ..errors import PipelineStageError
from ..runtime_tools import resolve_executable


def build_command(cargo_args: Sequence[str] = ()) -> list[str]:
    """Return the argument vector for a colorized `cargo check` run."""

    return [resolve_executable("cargo"), "check", "--color=always", *cargo_args]


def spawn_build(project_dir: Path, cargo_args: Sequence[str] = ()) -> subprocess.Popen[bytes]:
    """Start `cargo check` with both output streams piped."""

    command = build_command(cargo_args)
    try:
        return subprocess.Popen(
            command,
            cwd=project_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        raise PipelineStageError(
            stage="spawn",
            detail=f"Failed to start `{' '.join(command)}` in `{project_dir}`: {exc}",
            hint="Verify that `cargo` is installed and the project directory exists.",
        ) from exc
