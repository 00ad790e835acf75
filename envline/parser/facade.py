"""Parser facade choosing between line mode and hierarchical mode.

Responsibilities:
- Detect the input dialect from a `---` document-start line.
- Own the result mapping and feed it, read-only, to substitution providers.
- Validate `export` directives once every assignment is resolved.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from ..config import ParserSettings
from ..errors import FormatError
from ..models.datatypes import ParseMode
from ..provider_factory import ProviderFactory
from ..substitutions import SubstitutionPipeline
from ..telemetry.logger import RunLogger
from .decoder import decode_value
from .exports import validate_exports
from .flattener import flatten_document
from .tokenizer import normalize_line_endings, scan_assignments


_DOCUMENT_START = re.compile(r"^---$", re.MULTILINE)


def detect_mode(text: str) -> ParseMode:
    """Return `DOCUMENT` when any line is exactly `---`, else `LINES`."""

    if _DOCUMENT_START.search(normalize_line_endings(text)):
        return ParseMode.DOCUMENT
    return ParseMode.LINES


class Parser:
    """Parse configuration text into an ordered flat string mapping.

    Each `parse` call builds its own mapping, so one parser can serve many
    independent inputs.
    """

    def __init__(
        self,
        substitutions: SubstitutionPipeline | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Initialize the parser with an explicit substitution pipeline.

        Args:
            substitutions: Ordered providers; defaults to the pipeline built
                from `ParserSettings.from_env()`.
            run_logger: Event logger; defaults to a muted-until-enabled logger.
        """

        self._run_logger = run_logger if run_logger is not None else RunLogger()
        if substitutions is None:
            substitutions = ProviderFactory.create_pipeline(run_logger=self._run_logger)
        self._substitutions = substitutions

    @property
    def substitutions(self) -> SubstitutionPipeline:
        return self._substitutions

    def parse(self, text: str, is_load: bool = False) -> dict[str, str]:
        """Parse `text` and return the resolved mapping.

        Args:
            text: Source text, already read by the caller.
            is_load: Fresh-load (`True`) or overlay (`False`) intent, passed
                through to substitution providers.

        Raises:
            FormatError: If an `export` line names an unassigned key.
            DocumentError: If a hierarchical document cannot be flattened.
        """

        source = normalize_line_endings(text)
        mode = detect_mode(source)
        self._run_logger.log_mode_selected(mode.value)
        if mode is ParseMode.DOCUMENT:
            values = flatten_document(source)
        else:
            values = self._parse_lines(source, is_load)
        self._run_logger.log_parse_complete(mode.value, len(values))
        return values

    def _parse_lines(self, source: str, is_load: bool) -> dict[str, str]:
        values: dict[str, str] = {}
        resolved_so_far = MappingProxyType(values)
        scan = scan_assignments(source)
        for assignment in scan.assignments:
            decoded = decode_value(assignment.raw_value)
            values[assignment.key] = self._substitutions.apply(
                decoded.text, decoded.quote, resolved_so_far, is_load
            )

        try:
            validate_exports(scan.residue, values)
        except FormatError as exc:
            self._run_logger.log_export_failure(exc.line_number or 0)
            raise
        return values


def parse(
    text: str,
    is_load: bool = False,
    settings: ParserSettings | None = None,
) -> dict[str, str]:
    """Parse `text` with the default substitution pipeline for `settings`."""

    return Parser(ProviderFactory.create_pipeline(settings)).parse(text, is_load=is_load)
