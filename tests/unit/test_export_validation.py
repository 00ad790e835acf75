"""Unit tests for `export` directive validation."""

from __future__ import annotations

import pytest

from envline.errors import FormatError
from envline.models.datatypes import ResidueLine
from envline.parser.exports import validate_exports


def test_validate_exports_rejects_unassigned_names() -> None:
    """An exported name missing from the mapping should raise a format error."""

    with pytest.raises(FormatError, match=r"Line `export FOO` has an unset variable") as exc_info:
        validate_exports([ResidueLine(3, "export FOO")], {})

    assert exc_info.value.line == "export FOO"
    assert exc_info.value.line_number == 3
    assert exc_info.value.stage == "export"


def test_validate_exports_requires_every_listed_name() -> None:
    """All names after `export` must exist, not only the first one."""

    with pytest.raises(FormatError):
        validate_exports([ResidueLine(1, "export FOO BAR")], {"FOO": "1"})


def test_validate_exports_accepts_assigned_names() -> None:
    """Exporting already assigned names should pass without changes."""

    env = {"FOO": "1", "BAR": "2"}

    validate_exports([ResidueLine(1, "  export FOO   BAR ")], env)

    assert env == {"FOO": "1", "BAR": "2"}


@pytest.mark.parametrize(
    "text",
    ["", "   ", "# export FOO", "exported FOO", "export", "some stray text"],
)
def test_validate_exports_ignores_other_lines(text: str) -> None:
    """Blank, comment and stray lines should never fail validation."""

    validate_exports([ResidueLine(1, text)], {})
