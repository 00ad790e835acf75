"""Line-mode assignment tokenizer.

Responsibilities:
- Find every `KEY=VALUE` / `KEY: VALUE` assignment in document order.
- Keep the lines no assignment consumed so `export` directives can be checked.

The scanner walks the source once, starting a match attempt at every line
start. Each attempt moves through the states key, separator, value and
comment-or-end; a failed attempt leaves its line as residue.
"""

from __future__ import annotations

import re

from ..models.datatypes import RawAssignment, ResidueLine, ScanResult


_HORIZONTAL_WHITESPACE = frozenset(" \t\v\f")
_QUOTES = frozenset("'\"")
_EXPORT_KEYWORD = "export"
_LINE_BREAK = re.compile(r"\r\n?")


def normalize_line_endings(text: str) -> str:
    """Convert `\\r\\n` and lone `\\r` line breaks to `\\n`."""

    return _LINE_BREAK.sub("\n", text)


def scan_assignments(text: str) -> ScanResult:
    """Scan source text for assignments and unconsumed lines.

    Args:
        text: Full source text; line endings are normalized first.

    Returns:
        Assignments in document order plus residue lines.
    """

    source = normalize_line_endings(text)
    scanner = _LineScanner(source)
    result = ScanResult()
    position = 0
    line_number = 1
    while position < len(source):
        match = scanner.match_at(position)
        if match is None:
            line_end = scanner.line_end(position)
            result.residue.append(ResidueLine(line_number, source[position:line_end]))
            line_number += 1
        else:
            key, raw_value, line_end = match
            result.assignments.append(RawAssignment(key, raw_value, line_number))
            line_number += source.count("\n", position, line_end) + 1
        position = line_end + 1
    return result


def is_key_character(character: str) -> bool:
    """Return whether a character may appear in an assignment key."""

    return character in {"_", "."} or (character.isascii() and character.isalnum())


def is_valid_key(key: str) -> bool:
    """Return whether text is a complete, non-empty assignment key."""

    return bool(key) and all(is_key_character(character) for character in key)


class _LineScanner:
    """Match one assignment starting at a line start."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._length = len(source)

    def line_end(self, position: int) -> int:
        """Return the index of the next `\\n`, or the text length."""

        end = self._source.find("\n", position)
        return self._length if end < 0 else end

    def match_at(self, line_start: int) -> tuple[str, str | None, int] | None:
        """Return `(key, raw_value, end)` for an assignment at `line_start`.

        `end` is the index of the line break (or text end) closing the match.
        An `export` prefix is tried first; when the rest does not form an
        assignment, `export` itself is tried as the key.
        """

        position = self._skip_whitespace(line_start)
        after_export = self._expect_export(position)
        if after_export is not None:
            match = self._expect_key(after_export)
            if match is not None:
                return match
        return self._expect_key(position)

    def _expect_export(self, position: int) -> int | None:
        if not self._source.startswith(_EXPORT_KEYWORD, position):
            return None
        after = position + len(_EXPORT_KEYWORD)
        if after >= self._length or self._source[after] not in _HORIZONTAL_WHITESPACE:
            return None
        return self._skip_whitespace(after)

    def _expect_key(self, position: int) -> tuple[str, str | None, int] | None:
        key_end = position
        while key_end < self._length and is_key_character(self._source[key_end]):
            key_end += 1
        if key_end == position:
            return None

        value_start = self._expect_separator(key_end)
        if value_start is None:
            return None

        value = self._expect_value(value_start)
        if value is None:
            return None
        raw_value, end = value
        return self._source[position:key_end], raw_value, end

    def _expect_separator(self, position: int) -> int | None:
        """Return where the value starts after `=` or `:`, or `None`."""

        if position < self._length and self._source[position] == ":":
            after = position + 1
            if after >= self._length:
                return None
            following = self._source[after]
            if following == "\n" or following in _HORIZONTAL_WHITESPACE:
                return after
            return None

        probe = self._skip_whitespace(position)
        if probe < self._length and self._source[probe] == "=":
            return probe + 1
        return None

    def _expect_value(self, position: int) -> tuple[str | None, int] | None:
        """Match a quoted span, falling back to the unquoted reading."""

        probe = self._skip_whitespace(position)
        if probe < self._length and self._source[probe] in _QUOTES:
            quoted = self._expect_quoted(probe)
            if quoted is not None:
                return quoted

        value_end = position
        while value_end < self._length and self._source[value_end] not in {"#", "\n"}:
            value_end += 1
        end = self._expect_comment_or_end(value_end)
        if end is None:
            return None
        raw_value = self._source[position:value_end] or None
        return raw_value, end

    def _expect_quoted(self, start: int) -> tuple[str, int] | None:
        """Match a quoted span that may contain backslash-escaped quotes.

        A quote preceded by a backslash may either stay inside the span or
        close it; the longest span followed by a valid line tail wins.
        """

        quote = self._source[start]
        closing_candidates: list[int] = []
        index = start + 1
        while index < self._length:
            if self._source[index] == quote:
                closing_candidates.append(index)
                if self._source[index - 1] != "\\":
                    break
            index += 1

        for closing in reversed(closing_candidates):
            end = self._expect_comment_or_end(closing + 1)
            if end is not None:
                return self._source[start : closing + 1], end
        return None

    def _expect_comment_or_end(self, position: int) -> int | None:
        """Accept trailing whitespace and an optional `#` comment up to line end."""

        position = self._skip_whitespace(position)
        if position < self._length and self._source[position] == "#":
            position = self.line_end(position)
        if position >= self._length or self._source[position] == "\n":
            return position
        return None

    def _skip_whitespace(self, position: int) -> int:
        while position < self._length and self._source[position] in _HORIZONTAL_WHITESPACE:
            position += 1
        return position
