"""CLI output and error rendering helpers."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from .errors import PipelineStageError


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_template_created(config_path: Path) -> None:
    """Tell the user where the example configuration was written."""

    typer.echo(
        f"Example configuration {config_path} has been created. "
        "Please fill in the api_key and try again.",
        err=True,
    )
