"""File-level entry points around the parser.

Responsibilities:
- Read one configuration file and parse it with the default pipeline.
- Offer `load` (keep existing variables) and `overload` (replace them) helpers.

Key public functions:
- `parse_file`, `load`, `overload`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import MutableMapping

from .config import ParserSettings
from .environment import apply_to_environment
from .parser.facade import Parser
from .provider_factory import ProviderFactory
from .telemetry.logger import RunLogger


def read_source(path: Path) -> str:
    """Read a configuration file as UTF-8 text."""

    return path.read_text(encoding="utf-8")


def parse_file(
    path: Path | str,
    is_load: bool = False,
    settings: ParserSettings | None = None,
    environ: MutableMapping[str, str] | None = None,
    run_logger: RunLogger | None = None,
) -> dict[str, str]:
    """Parse one file without touching any environment.

    Raises:
        FileNotFoundError: If `path` does not exist.
    """

    pipeline = ProviderFactory.create_pipeline(
        settings=settings, environ=environ, run_logger=run_logger
    )
    parser = Parser(pipeline, run_logger=run_logger)
    return parser.parse(read_source(Path(path)), is_load=is_load)


def load(
    path: Path | str,
    environ: MutableMapping[str, str] | None = None,
    settings: ParserSettings | None = None,
    run_logger: RunLogger | None = None,
) -> dict[str, str]:
    """Parse a file and set only the keys the environment does not have yet.

    Returns:
        The full parsed mapping, including keys that were not written.
    """

    target = environ if environ is not None else os.environ
    values = parse_file(path, True, settings, target, run_logger)
    apply_to_environment(values, target, overwrite=False)
    return values


def overload(
    path: Path | str,
    environ: MutableMapping[str, str] | None = None,
    settings: ParserSettings | None = None,
    run_logger: RunLogger | None = None,
) -> dict[str, str]:
    """Parse a file and set every key, replacing existing environment values."""

    target = environ if environ is not None else os.environ
    values = parse_file(path, False, settings, target, run_logger)
    apply_to_environment(values, target, overwrite=True)
    return values
