"""Runtime executable resolution helpers.

Responsibilities:
- Resolve the build tool executable with deterministic precedence.
- Honor the `CARGO` variable that cargo exports to its external subcommands.
"""

from __future__ import annotations

import os
import shutil
from typing import Mapping


def resolve_executable(command_name: str, env: Mapping[str, str] | None = None) -> str:
    """Resolve an executable with environment-override-first precedence, then PATH.

    Resolution order:
    1. `<COMMAND_NAME>` environment variable when it names an existing file
       (for example `CARGO=/home/user/.cargo/bin/cargo`).
    2. System `PATH`.
    3. Raw command name (allowing subprocess to raise a native missing-binary error).
    """

    normalized = command_name.strip()
    if not normalized:
        return command_name

    env_map: Mapping[str, str] = os.environ if env is None else env
    override = env_map.get(_env_key(normalized), "").strip()
    if override and os.path.isfile(override):
        return override

    resolved_path = shutil.which(normalized)
    if resolved_path is not None:
        return resolved_path

    return normalized


def _env_key(command_name: str) -> str:
    """Return the override variable name for a command."""

    return command_name.upper().replace("-", "_")
