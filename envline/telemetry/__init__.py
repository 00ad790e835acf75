"""Telemetry and observability helpers.

This package emits deterministic parse events for auditing CLI runs.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
