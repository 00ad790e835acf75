"""Parsing helpers for `ENVLINE_*` settings values."""

from __future__ import annotations


_BOOLEAN_TOKENS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def normalize_optional_string(value: str | None) -> str | None:
    """Return stripped text, or `None` for a missing or blank value."""

    if value is None:
        return None
    return value.strip() or None


def parse_required_boolean(value: str, field_name: str) -> bool:
    """Parse a case-insensitive switch token such as `true`, `0` or `off`.

    Raises:
        ValueError: If the token is not an accepted switch value.
    """

    parsed = _BOOLEAN_TOKENS.get(value.strip().lower())
    if parsed is None:
        raise ValueError(
            f"`{field_name}` must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
        )
    return parsed


def parse_positive_float(value: str, field_name: str) -> float:
    """Parse a number greater than zero.

    Raises:
        ValueError: If the value is not a number greater than zero.
    """

    message = f"`{field_name}` must be a positive number."
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise ValueError(message) from exc
    if not parsed > 0:
        raise ValueError(message)
    return parsed
