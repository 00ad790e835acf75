"""Assignment value decoding.

Responsibilities:
- Remove one surrounding quote pair and record which quote kind it was.
- Apply the escaping rules of that quote kind before substitution runs.
"""

from __future__ import annotations

import re

from ..models.datatypes import DecodedValue, QuoteKind


_WHITESPACE = " \t\n\v\f\r\x00"
_ESCAPED_CHARACTER = re.compile(r"\\([^$])")
_QUOTE_KINDS = {"'": QuoteKind.SINGLE, '"': QuoteKind.DOUBLE}


def decode_value(raw_value: str | None) -> DecodedValue:
    """Decode one raw assignment value.

    Args:
        raw_value: Captured value text, or `None` when the assignment had no value.

    Returns:
        Decoded text plus the quote kind that surrounded it.
    """

    text = (raw_value or "").strip(_WHITESPACE)
    quote = detect_quote(text)
    if quote is not QuoteKind.ABSENT:
        text = text[1:-1]
    return DecodedValue(text=unescape_value(text, quote), quote=quote)


def detect_quote(text: str) -> QuoteKind:
    """Return the quote kind when one matching pair spans the whole text."""

    if len(text) < 2 or text[0] != text[-1]:
        return QuoteKind.ABSENT
    return _QUOTE_KINDS.get(text[0], QuoteKind.ABSENT)


def unescape_value(text: str, quote: QuoteKind) -> str:
    """Apply quote-specific escaping rules.

    Double-quoted text expands `\\n`/`\\r` first; unquoted text only drops
    backslashes. `\\$` always survives so variable substitution can see it.
    Single-quoted text is returned unchanged.
    """

    if quote is QuoteKind.DOUBLE:
        return unescape_characters(expand_newlines(text))
    if quote is QuoteKind.ABSENT:
        return unescape_characters(text)
    return text


def expand_newlines(text: str) -> str:
    return text.replace("\\n", "\n").replace("\\r", "\r")


def unescape_characters(text: str) -> str:
    return _ESCAPED_CHARACTER.sub(r"\1", text)
