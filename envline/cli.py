"""Command-line interface for envline.

Responsibilities:
- Expose user-facing commands to parse, check and apply configuration files.
- Convert CLI options into `ParserSettings` and map failures to stage errors.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
import os
from pathlib import Path
import subprocess
import sys
from typing import Annotated

import typer

from .cli_rendering import echo_check_summary, exit_with_command_error
from .config import ParserSettings
from .environment import apply_to_environment
from .errors import EnvlineError
from .loader import parse_file
from .rendering import OutputFormat, render_mapping
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="envline",
    no_args_is_help=True,
    help="Parse dotenv-style and YAML configuration into environment variables.",
)


def _resolve_settings(commands: bool) -> ParserSettings:
    """Load settings from `ENVLINE_*` variables and apply CLI overrides."""

    try:
        settings = ParserSettings.from_env()
    except ValueError as exc:
        raise EnvlineError(
            stage="config",
            detail=str(exc),
            hint="Fix the `ENVLINE_*` environment variables and rerun.",
        ) from exc
    if not commands:
        settings = replace(settings, command_substitution=False)
    return settings


def _parse_source(
    source: Path,
    is_load: bool,
    settings: ParserSettings,
    run_logger: RunLogger,
) -> dict[str, str]:
    """Parse one file and map file-system failures to stage errors."""

    try:
        return parse_file(source, is_load=is_load, settings=settings, run_logger=run_logger)
    except FileNotFoundError as exc:
        raise EnvlineError(
            stage="read",
            detail=f"Config file not found: `{source}`.",
            hint="Pass the path of an existing file.",
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise EnvlineError(
            stage="read",
            detail=f"Failed to read config file `{source}`: {exc}",
            hint="Verify file permissions and UTF-8 encoding.",
        ) from exc


def _run_logger(verbose: bool) -> RunLogger:
    return RunLogger(sink=sys.stderr, level="DEBUG" if verbose else "WARNING")


SourceArgument = Annotated[Path, typer.Argument(help="Path to the configuration file.")]
CommandsOption = Annotated[
    bool,
    typer.Option(
        "--commands/--no-commands",
        help="Run `$(...)` command substitutions.",
    ),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Emit parse events on stderr.")
]


@app.command("parse")
def parse_command(
    source: SourceArgument,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format."),
    ] = OutputFormat.ENV,
    load_mode: Annotated[
        bool,
        typer.Option(
            "--load/--overlay",
            help="Resolve `$VAR` with existing environment values winning (load) "
            "or file values winning (overlay).",
        ),
    ] = False,
    commands: CommandsOption = True,
    verbose: VerboseOption = False,
) -> None:
    """Parse a file and print the resolved variables."""

    try:
        settings = _resolve_settings(commands)
        values = _parse_source(source, load_mode, settings, _run_logger(verbose))
        rendered = render_mapping(values, output_format)
    except Exception as exc:
        exit_with_command_error("parse", exc)

    if rendered:
        typer.echo(rendered)


@app.command("check")
def check_command(
    source: SourceArgument,
    commands: CommandsOption = True,
    verbose: VerboseOption = False,
) -> None:
    """Validate a file and list the keys it defines."""

    try:
        settings = _resolve_settings(commands)
        values = _parse_source(source, False, settings, _run_logger(verbose))
    except Exception as exc:
        exit_with_command_error("check", exc)

    echo_check_summary(values)


@app.command(
    "exec",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def exec_command(
    source: SourceArgument,
    command: Annotated[
        list[str],
        typer.Argument(help="Command to run with the parsed variables set."),
    ],
    overload: Annotated[
        bool,
        typer.Option(
            "--overload",
            help="Overwrite variables that already exist in the environment.",
        ),
    ] = False,
    commands: CommandsOption = True,
    verbose: VerboseOption = False,
) -> None:
    """Run a command with the file's variables added to the environment."""

    try:
        settings = _resolve_settings(commands)
        values = _parse_source(source, not overload, settings, _run_logger(verbose))
        child_env = dict(os.environ)
        apply_to_environment(values, child_env, overwrite=overload)
        try:
            completed = subprocess.run(command, env=child_env, check=False)
        except OSError as exc:
            raise EnvlineError(
                stage="exec",
                detail=f"Failed to start `{command[0]}`: {exc}",
                hint="Check that the command exists and is executable.",
            ) from exc
    except Exception as exc:
        exit_with_command_error("exec", exc)

    raise typer.Exit(code=completed.returncode)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
