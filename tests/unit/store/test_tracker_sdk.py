"""Unit tests for the flip tracker SDK client."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from core.config import TrackerConfig
from core.errors import TrackerIngestError
from store.tracker_sdk import FlipTrackerClient
from tests.fixture_paths import fixture_path


def _client(tmp_path) -> FlipTrackerClient:
    config = replace(TrackerConfig.from_env(), data_root=tmp_path, source_path=None)
    return FlipTrackerClient(config, lambda: datetime(2025, 7, 30, 12, 0, tzinfo=timezone.utc))


def test_ingest_without_source_raises(tmp_path) -> None:
    """Ingest should fail clearly when no export path is known."""
    with pytest.raises(TrackerIngestError):
        _client(tmp_path).ingest()


def test_ingest_uses_configured_source(tmp_path) -> None:
    """The configured source path should be used as a fallback."""
    client = _client(tmp_path)
    configured = FlipTrackerClient(
        replace(client.config, source_path=fixture_path("exports/flips_export.csv"))
    )

    assert configured.ingest().accepted_count == 3


def test_run_all_reports_counts(tmp_path) -> None:
    """A full run should report items, summaries, and totals."""
    report = _client(tmp_path).run_all(str(fixture_path("exports/flips_export.csv")))

    assert (report.item_count, report.summary_count, report.meta.total_flip_count) == (2, 3, 3)


def test_run_all_records_step_timings(tmp_path) -> None:
    """Each pipeline step should report a duration."""
    report = _client(tmp_path).run_all(str(fixture_path("exports/flips_export.csv")))

    assert set(report.step_seconds) == {"ingest", "item_stats", "day_summaries", "meta"}


def test_with_data_root_returns_new_client(tmp_path) -> None:
    """Cloning with a data root should not change the original client."""
    client = _client(tmp_path)

    clone = client.with_data_root(str(tmp_path / "other"))

    assert clone.config.data_root != client.config.data_root
