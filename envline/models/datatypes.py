"""Core datatypes shared across envline modules.

Responsibilities:
- Represent transient records exchanged between tokenizer, decoder and substitution stages.
- Provide explicit typing for the two input dialects.

Key types:
- `QuoteKind`, `RawAssignment`, `DecodedValue`, `ScanResult`, `ParseMode`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class QuoteKind(str, Enum):
    """Quote style detected around one assignment value."""

    SINGLE = "single"
    DOUBLE = "double"
    ABSENT = "absent"


class ParseMode(str, Enum):
    """Input dialect selected by the parser facade."""

    LINES = "lines"
    DOCUMENT = "document"


@dataclass(frozen=True, slots=True)
class RawAssignment:
    """One `KEY=VALUE` match found by the tokenizer.

    Attributes:
        key: Assignment key (ASCII word characters and dots).
        raw_value: Captured value text, or `None` when no value followed the separator.
        line_number: 1-based line where the assignment starts.
    """

    key: str
    raw_value: str | None
    line_number: int


@dataclass(frozen=True, slots=True)
class DecodedValue:
    """Value after quote removal and unescaping.

    Attributes:
        text: Decoded value text.
        quote: Quote kind that surrounded the raw value.
    """

    text: str
    quote: QuoteKind


@dataclass(frozen=True, slots=True)
class ResidueLine:
    """A source line that no assignment consumed.

    Attributes:
        line_number: 1-based line number in the normalized source.
        text: Line content without its terminator.
    """

    line_number: int
    text: str


@dataclass(slots=True)
class ScanResult:
    """Tokenizer output for one source text.

    Attributes:
        assignments: Matches in document order.
        residue: Lines not consumed by any assignment, in document order.
    """

    assignments: list[RawAssignment] = field(default_factory=list)
    residue: list[ResidueLine] = field(default_factory=list)
