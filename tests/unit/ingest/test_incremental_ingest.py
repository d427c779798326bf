"""Unit tests for incremental trade selection."""

from __future__ import annotations

from datetime import datetime, timezone

from core.csv_codec import decode
from ingest.incremental_ingest import select_new_records
from tests.fixture_paths import fixture_path

_CUTOFF = datetime(2025, 7, 28, 5, 0, tzinfo=timezone.utc)


def _rows(name: str) -> list[dict[str, str]]:
    return decode(fixture_path(f"exports/{name}").read_text(encoding="utf-8")).records


def test_select_groups_new_records_by_closing_date() -> None:
    """Accepted trades should be grouped per closing-date key."""
    selection = select_new_records(_rows("flips_export.csv"), {}, _CUTOFF, timezone.utc)

    assert {key: len(records) for key, records in selection.records_by_date.items()} == {
        "07-28-2025": 1,
        "07-29-2025": 2,
    }


def test_select_counts_skipped_rows() -> None:
    """Deleted, pre-cutoff, and unclosed rows should each be counted."""
    selection = select_new_records(_rows("flips_export.csv"), {}, _CUTOFF, timezone.utc)

    assert (
        selection.deleted_count,
        selection.before_cutoff_count,
        selection.unclosed_count,
    ) == (1, 1, 1)


def test_select_skips_hashes_already_indexed() -> None:
    """A second pass against the augmented index should accept nothing."""
    rows = _rows("flips_export.csv")
    first = select_new_records(rows, {}, _CUTOFF, timezone.utc)

    second = select_new_records(rows, first.identity_index, _CUTOFF, timezone.utc)

    assert (second.accepted_count, second.duplicate_count) == (0, 3)


def test_select_does_not_mutate_caller_index() -> None:
    """The caller's index should be left untouched."""
    identity_index: dict[str, str] = {}

    select_new_records(_rows("flips_export.csv"), identity_index, _CUTOFF, timezone.utc)

    assert identity_index == {}


def test_select_counts_in_export_duplicates() -> None:
    """Repeated rows within one export should be ingested once."""
    rows = _rows("flips_export.csv")
    selection = select_new_records(rows + rows[:1], {}, _CUTOFF, timezone.utc)

    assert (selection.accepted_count, selection.duplicate_count) == (3, 1)


def test_select_skipped_rows_never_reach_index() -> None:
    """Only trade rows should add hashes to the index."""
    skipped_items = {"Old Trade", "Deleted Thing", "Open Offer"}
    rows = [row for row in _rows("flips_export.csv") if row["Item"] in skipped_items]

    selection = select_new_records(rows, {}, _CUTOFF, timezone.utc)

    assert (selection.identity_index, selection.records_by_date) == ({}, {})
