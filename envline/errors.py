"""Domain exceptions for parser and CLI diagnostics."""

from __future__ import annotations


class EnvlineError(RuntimeError):
    """Base error carrying the stage where parsing failed."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped parser error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class FormatError(EnvlineError):
    """Raised when an `export` directive names a key that was never assigned."""

    def __init__(self, line: str, line_number: int | None = None) -> None:
        super().__init__(
            stage="export",
            detail=f"Line `{line}` has an unset variable",
            hint="Assign every exported name before exporting it.",
        )
        self.line = line
        self.line_number = line_number


class DocumentError(EnvlineError):
    """Raised when a hierarchical document cannot be flattened."""

    def __init__(self, detail: str, hint: str | None = None) -> None:
        super().__init__(stage="document", detail=detail, hint=hint)


class SubstitutionError(EnvlineError):
    """Raised by command runners when a `$(...)` command cannot be executed."""

    def __init__(self, command: str, detail: str) -> None:
        super().__init__(stage="substitution", detail=detail)
        self.command = command
