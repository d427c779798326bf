"""Public SDK surface for the flip tracker.

This module provides a stable import path for SDK users.
It re-exports the primary client, config, and typed result models.
"""

from __future__ import annotations

from core.config import TrackerConfig
from core.errors import (
    FlipTrackerError,
    MalformedTradeRowError,
    TrackerConfigError,
    TrackerIngestError,
    TrackerStoreError,
)
from core.types import (
    DayRollup,
    IngestResult,
    ItemRollup,
    MetaSummary,
    PipelineReport,
    TradeRecord,
)
from store.tracker_sdk import FlipTrackerClient

__all__ = [
    "DayRollup",
    "FlipTrackerClient",
    "FlipTrackerError",
    "IngestResult",
    "ItemRollup",
    "MalformedTradeRowError",
    "MetaSummary",
    "PipelineReport",
    "TrackerConfig",
    "TrackerConfigError",
    "TrackerIngestError",
    "TrackerStoreError",
    "TradeRecord",
]
