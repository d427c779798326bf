"""Python SDK for flip tracker operations.

This module exposes high-level APIs for ingesting exports, rebuilding
rollups, and running the full pipeline with per-step timings.
"""

from __future__ import annotations

import time
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Callable

from aggregate.day_summary import run_day_summaries
from aggregate.item_stats import run_item_stats
from aggregate.meta_summary import run_meta, run_summary_index
from core.config import TrackerConfig
from core.errors import TrackerIngestError
from core.logging_config import get_logger
from core.types import DayRollup, IngestResult, ItemRollup, MetaSummary, PipelineReport
from ingest.pipeline import ingest_export

_LOGGER = get_logger(__name__)


class FlipTrackerClient:
    """Primary SDK entry point for flip tracker workflows."""

    def __init__(
        self,
        config: TrackerConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            clock: Optional clock for archive dates and ``last_updated``.
        """
        self._config = config or TrackerConfig.from_env()
        self._clock = clock

    @property
    def config(self) -> TrackerConfig:
        """Runtime configuration used by this client."""
        return self._config

    def ingest(self, source_path: str | None = None) -> IngestResult:
        """Ingest an export into the partition store.

        Args:
            source_path: Export path; falls back to the configured source.

        Returns:
            Ingest outcome counts.

        Raises:
            TrackerIngestError: If no source is available, the export
                cannot be read, or a row is malformed.
            TrackerStoreError: If persistence fails.
        """
        return ingest_export(self._resolve_source(source_path), self._config, self._clock)

    def build_item_stats(self) -> list[ItemRollup]:
        """Rebuild the item stats CSV from all partitions."""
        return run_item_stats(self._config)

    def build_day_summaries(self) -> list[DayRollup]:
        """Rebuild every day summary from all partitions."""
        return run_day_summaries(self._config)

    def write_meta(self) -> MetaSummary:
        """Rebuild the global meta summary from all partitions."""
        return run_meta(self._config, self._clock)

    def write_summary_index(self) -> list[str]:
        """Rebuild the day-summary index from summary files on disk."""
        return run_summary_index(self._config)

    def run_all(self, source_path: str | None = None) -> PipelineReport:
        """Run ingest and every aggregation step in order.

        Any step failure aborts the run; steps already completed keep
        their outputs.

        Args:
            source_path: Export path; falls back to the configured source.

        Returns:
            Counts and per-step durations.
        """
        step_seconds: dict[str, float] = {}
        started_at = time.perf_counter()
        ingest_result = self.ingest(source_path)
        step_seconds["ingest"] = _elapsed(started_at)

        started_at = time.perf_counter()
        item_rollups = self.build_item_stats()
        step_seconds["item_stats"] = _elapsed(started_at)

        started_at = time.perf_counter()
        self.build_day_summaries()
        step_seconds["day_summaries"] = _elapsed(started_at)

        started_at = time.perf_counter()
        meta = self.write_meta()
        summary_keys = self.write_summary_index()
        step_seconds["meta"] = _elapsed(started_at)

        report = PipelineReport(
            ingest=ingest_result,
            item_count=len(item_rollups),
            summary_count=len(summary_keys),
            meta=meta,
            step_seconds=step_seconds,
        )
        _LOGGER.info(
            "pipeline_completed",
            accepted_count=ingest_result.accepted_count,
            duplicate_count=ingest_result.duplicate_count,
            item_count=report.item_count,
            summary_count=report.summary_count,
            total_flip_count=meta.total_flip_count,
            step_seconds=step_seconds,
        )
        return report

    def with_data_root(self, data_root: str) -> "FlipTrackerClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        updated_config = replace(self._config, data_root=resolved_root)
        return FlipTrackerClient(updated_config, self._clock)

    def _resolve_source(self, source_path: str | None) -> Path:
        if source_path:
            return Path(source_path).expanduser()
        if self._config.source_path is not None:
            return self._config.source_path
        raise TrackerIngestError(
            "No trade export path provided. "
            "Pass the export path or set FLIP_TRACKER_SOURCE."
        )


def _elapsed(started_at: float) -> float:
    return round(time.perf_counter() - started_at, 3)
