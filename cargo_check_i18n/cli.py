"""Command-line interface for cargo-check-i18n.

Responsibilities:
- Expose user-facing commands for running translated checks and writing the
  configuration template.
- Load the configuration snapshot once and hand it to `CheckPipeline`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_template_created, exit_with_command_error
from .config import CheckConfig, ConfigLoader, default_config_path
from .errors import PipelineStageError
from .pipeline import CheckPipeline

app = typer.Typer(
    name="cargo-check-i18n",
    no_args_is_help=True,
    help="Run `cargo check` with translated diagnostics.",
)


def _load_config(config_path: Path) -> CheckConfig | None:
    """Load the config file, returning `None` when it does not exist yet."""

    if not config_path.exists():
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config values (for example `api_key`) and rerun.",
        ) from exc
    except OSError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to read config file `{config_path}`: {exc}",
            hint="Verify file permissions.",
        ) from exc


def _write_template(config_path: Path, *, overwrite: bool) -> bool:
    """Write the example config and map filesystem failures to stage errors."""

    try:
        return ConfigLoader.write_template(config_path, overwrite=overwrite)
    except OSError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to write config template `{config_path}`: {exc}",
            hint="Pass a writable location via `--config <path.yaml>`.",
        ) from exc


@app.command("check")
def check_command(
    project_dir: Annotated[
        Path,
        typer.Argument(help="Cargo project directory to check."),
    ] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to the YAML configuration file."),
    ] = None,
    cargo_args: Annotated[
        list[str] | None,
        typer.Option("--cargo-arg", help="Extra argument passed to `cargo check`."),
    ] = None,
) -> None:
    """Run `cargo check` and append translations to diagnostic lines."""

    config_path = config_file if config_file is not None else default_config_path()
    try:
        config = _load_config(config_path)
        if config is None:
            _write_template(config_path, overwrite=False)
            echo_template_created(config_path)
            raise typer.Exit(code=0)
        exit_code = CheckPipeline(config).run(project_dir, cargo_args or [])
    except PipelineStageError as exc:
        exit_with_command_error("check", exc)

    raise typer.Exit(code=exit_code)


@app.command("init")
def init_command(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Where to write the YAML configuration file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write the example configuration file."""

    config_path = config_file if config_file is not None else default_config_path()
    try:
        written = _write_template(config_path, overwrite=force)
        if not written:
            raise PipelineStageError(
                stage="config",
                detail=f"Config file `{config_path}` already exists.",
                hint="Pass `--force` to overwrite it.",
            )
    except PipelineStageError as exc:
        exit_with_command_error("init", exc)

    echo_template_created(config_path)


def main() -> None:
    """Run the CLI application."""

    app()
