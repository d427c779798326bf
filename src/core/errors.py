"""Flip tracker exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations

from typing import Mapping


class FlipTrackerError(Exception):
    """Base exception for all flip tracker failures."""


class TrackerConfigError(FlipTrackerError):
    """Raised for invalid runtime configuration."""


class TrackerIngestError(FlipTrackerError):
    """Raised for export reading and ingest failures."""


class MalformedTradeRowError(TrackerIngestError):
    """Raised when an export row lacks the fields needed to identify a trade.

    Attributes:
        row: Raw export row that failed validation.
    """

    def __init__(self, message: str, row: Mapping[str, str]) -> None:
        super().__init__(message)
        self.row = dict(row)


class TrackerStoreError(FlipTrackerError):
    """Raised for partition, index, and output persistence failures."""
