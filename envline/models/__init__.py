"""Shared typed data models for envline.

This package contains dataclasses used across parser modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    DecodedValue,
    ParseMode,
    QuoteKind,
    RawAssignment,
    ResidueLine,
    ScanResult,
)

__all__ = [
    "DecodedValue",
    "ParseMode",
    "QuoteKind",
    "RawAssignment",
    "ResidueLine",
    "ScanResult",
]
