"""Validation of `export NAME ...` directive lines."""

from __future__ import annotations

from typing import Iterable, Mapping

from ..errors import FormatError
from ..models.datatypes import ResidueLine


def validate_exports(lines: Iterable[ResidueLine], env: Mapping[str, str]) -> None:
    """Check every `export` directive against the keys resolved so far.

    Lines that are blank, comments or any other stray text are ignored.

    Raises:
        FormatError: If an exported name was never assigned.
    """

    for line in lines:
        tokens = line.text.split()
        if not tokens or tokens[0] != "export":
            continue
        if not all(name in env for name in tokens[1:]):
            raise FormatError(line.text, line_number=line.line_number)
