"""Structured parse logging utilities.

Responsibilities:
- Emit concise, deterministic parse-level runtime logs through `loguru`.
- Keep resolved values out of log lines; only keys, counts and error types are logged.
"""

from __future__ import annotations

from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class RunLogger:
    """Emit deterministic parse logs for CLI-observable parser activity."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Initialize the logger; passing a sink also enables and formats output.

        Without a sink, events go to whatever handlers the host application
        configured, and stay muted while the `envline` logger is disabled.
        """

        self._sink = sink
        if sink is not None:
            _loguru_logger.remove()
            _loguru_logger.add(sink, format="{message}", level=level, colorize=False)
            _loguru_logger.enable("envline")

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured runtime log line."""

        line = f"[parse] level={level} stage={stage} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def log_mode_selected(self, mode: str) -> None:
        """Emit the input dialect chosen for one parse."""

        self._emit("DEBUG", "mode", "facade", mode=mode)

    def log_parse_complete(self, mode: str, key_count: int) -> None:
        """Emit a parse-complete event with the number of resolved keys."""

        self._emit("INFO", "complete", "facade", keys=key_count, mode=mode)

    def log_export_failure(self, line_number: int) -> None:
        """Emit an export-validation failure without the line payload."""

        self._emit("ERROR", "failure", "export", line=line_number)

    def log_command_failure(self, error_type: str) -> None:
        """Emit a failed `$(...)` command substitution without its output."""

        self._emit("WARNING", "failure", "substitution", error_type=error_type)

    def log_command_exit_status(self, returncode: int) -> None:
        """Emit a non-zero exit status of a substituted command."""

        self._emit("WARNING", "nonzero_exit", "substitution", returncode=returncode)
