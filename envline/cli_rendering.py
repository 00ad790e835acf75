"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and parse summaries.
"""

from __future__ import annotations

from typing import Mapping, NoReturn

import typer

from .errors import EnvlineError


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, EnvlineError):
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


def echo_check_summary(values: Mapping[str, str]) -> None:
    """Print the key count and sorted key names of a successful parse."""

    typer.echo(f"OK: {len(values)} keys")
    for key in sorted(values):
        typer.echo(f"  {key}")
