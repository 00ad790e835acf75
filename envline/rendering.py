"""Serialization of resolved mappings for CLI output.

Supported formats:
- `env`: `KEY='value'` / `KEY="value"` lines that parse back to the same mapping.
- `json`: one JSON object, keys in parse order.
- `shell`: `export KEY='value'` lines for POSIX shells.
"""

from __future__ import annotations

from enum import Enum
import json
import shlex
from typing import Mapping

from .parser.tokenizer import is_valid_key


class OutputFormat(str, Enum):
    """Output format accepted by `render_mapping`."""

    ENV = "env"
    JSON = "json"
    SHELL = "shell"


def render_mapping(values: Mapping[str, str], output_format: OutputFormat) -> str:
    """Render `values` in the requested format.

    Raises:
        ValueError: If a key is not a valid assignment key (`env`/`shell`), or
            a value cannot be written in `env` format.
    """

    if output_format is OutputFormat.JSON:
        return json.dumps(dict(values), indent=2, ensure_ascii=False)

    lines: list[str] = []
    for key, value in values.items():
        if not is_valid_key(key):
            raise ValueError(f"Key `{key}` is not a valid assignment key.")
        if output_format is OutputFormat.SHELL:
            lines.append(f"export {key}={shlex.quote(value)}")
        else:
            lines.append(f"{key}={quote_env_value(key, value)}")
    return "\n".join(lines)


def quote_env_value(key: str, value: str) -> str:
    """Quote one value so the line-mode parser reads it back unchanged.

    Single quotes keep text verbatim, so they are used whenever the value has
    neither `'` nor a carriage return. Otherwise the value is double-quoted
    with `\\`, `"`, `$` and line breaks escaped; a literal `\\n` or `\\r` cannot
    survive double-quote decoding, and a trailing backslash would escape the
    closing quote in either form.
    """

    if value.endswith("\\"):
        raise ValueError(
            f"Value of `{key}` ends with a backslash, which would escape its closing quote."
        )
    if "'" not in value and "\r" not in value:
        return f"'{value}'"
    if "\\n" in value or "\\r" in value:
        raise ValueError(
            f"Value of `{key}` needs double quotes but contains a literal `\\n` or `\\r`."
        )
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'
