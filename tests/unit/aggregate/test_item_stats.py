"""Unit tests for per-item rollups."""

from __future__ import annotations

from datetime import timezone

from aggregate.item_stats import build_item_rollups
from core.csv_codec import CsvTable
from core.types import ItemRollup, TradeRecord
from store.partition_store import PartitionStore

_HEADER = ("item_name", "spent", "profit", "closed_time")


def _table(*rows: tuple[str, str, str, str]) -> CsvTable:
    return CsvTable(header=_HEADER, records=[dict(zip(_HEADER, row)) for row in rows])


def _rollups(*tables: CsvTable) -> list[ItemRollup]:
    return build_item_rollups(tables, timezone.utc)


def test_item_rollup_folds_across_partitions() -> None:
    """Trades in different partitions should fold into one item."""
    rollups = _rollups(
        _table(("Rune Scimitar", "14800", "100", "2025-07-28T12:00:00Z")),
        _table(("Rune Scimitar", "15000", "-20", "2025-07-29T11:00:00Z")),
    )

    assert (rollups[0].flip_count, rollups[0].total_profit) == (2, 80.0)


def test_item_rollup_roi_uses_summed_spent() -> None:
    """ROI should be total profit over total spent."""
    rollups = _rollups(
        _table(("Whip", "100", "10", "2025-07-28T12:00:00Z")),
        _table(("Whip", "300", "30", "2025-07-29T11:00:00Z")),
    )

    assert rollups[0].roi_percent == 10.0


def test_item_rollup_zero_spent_has_zero_roi() -> None:
    """Items with nothing spent should report zero ROI."""
    rollups = _rollups(_table(("Whip", "", "10", "2025-07-28T12:00:00Z")))

    assert rollups[0].roi_percent == 0.0


def test_item_rollup_tracks_latest_close() -> None:
    """last_flipped should be the latest closing date."""
    rollups = _rollups(
        _table(("Whip", "1", "1", "2025-07-30T12:00:00Z")),
        _table(("Whip", "1", "1", "2025-07-28T12:00:00Z")),
    )

    assert rollups[0].last_flipped == "07-30-2025"


def test_item_rollup_trims_item_names() -> None:
    """Whitespace variants of a name should fold together."""
    rollups = _rollups(
        _table(("Whip ", "1", "1", "2025-07-28T12:00:00Z"), (" Whip", "1", "1", "2025-07-28T13:00:00Z"))
    )

    assert len(rollups) == 1


def test_item_rollups_sort_by_total_profit() -> None:
    """Rollups should be ordered by total profit, highest first."""
    rollups = _rollups(
        _table(
            ("Low", "1", "5", "2025-07-28T12:00:00Z"),
            ("High", "1", "50", "2025-07-28T12:00:00Z"),
        )
    )

    assert [rollup.item_name for rollup in rollups] == ["High", "Low"]


def test_item_rollups_keep_first_seen_order_on_ties() -> None:
    """Equal profits should keep first-seen order."""
    rollups = _rollups(
        _table(
            ("First", "1", "5", "2025-07-28T12:00:00Z"),
            ("Second", "1", "5", "2025-07-28T12:00:00Z"),
        )
    )

    assert [rollup.item_name for rollup in rollups] == ["First", "Second"]


def test_item_rollups_read_stored_partition_columns(tmp_path) -> None:
    """Rollups should fold rows exactly as the partition store writes them."""
    store = PartitionStore(tmp_path)
    store.append_records(
        "07-28-2025",
        [
            TradeRecord(
                account_id="main",
                item_name="Whip",
                status="FINISHED",
                opened_quantity=2,
                closed_quantity=2,
                avg_buy_price=100,
                avg_sell_price=120,
                tax_paid=0,
                profit=40,
                opened_time="2025-07-28T10:00:00Z",
                closed_time="2025-07-28T12:00:00Z",
                identity_hash="hash-whip",
            )
        ],
    )

    rollups = build_item_rollups((table for _, table in store.iter_tables()), timezone.utc)

    assert (rollups[0].total_spent, rollups[0].total_profit, rollups[0].last_flipped) == (
        200.0,
        40.0,
        "07-28-2025",
    )
