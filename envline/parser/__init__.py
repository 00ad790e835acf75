"""Parsing engine for line-mode assignments and hierarchical documents."""

from .decoder import decode_value
from .exports import validate_exports
from .facade import Parser, detect_mode, parse
from .flattener import flatten_document
from .tokenizer import is_valid_key, normalize_line_endings, scan_assignments

__all__ = [
    "Parser",
    "decode_value",
    "detect_mode",
    "flatten_document",
    "is_valid_key",
    "normalize_line_endings",
    "parse",
    "scan_assignments",
    "validate_exports",
]
