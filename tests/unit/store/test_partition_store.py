"""Unit tests for date-partitioned trade storage."""

from __future__ import annotations

import pytest

from core.errors import TrackerStoreError
from core.types import TradeRecord
from store.partition_store import PartitionStore, read_partition


def _record(item_name: str, profit: float) -> TradeRecord:
    return TradeRecord(
        account_id="main",
        item_name=item_name,
        status="FINISHED",
        opened_quantity=1,
        closed_quantity=1,
        avg_buy_price=100,
        avg_sell_price=110,
        tax_paid=2,
        profit=profit,
        opened_time="2025-07-28T10:00:00Z",
        closed_time="2025-07-28T12:00:00Z",
        identity_hash=f"hash-{item_name}",
    )


def test_partition_path_nests_by_year_month_day(tmp_path) -> None:
    """Partitions should live under year, month, and day directories."""
    store = PartitionStore(tmp_path)

    assert store.partition_path("07-28-2025") == (
        tmp_path / "processed-flips" / "2025" / "07" / "28" / "07-28-2025.csv"
    )


def test_append_records_writes_header_once(tmp_path) -> None:
    """A second append should not repeat the header row."""
    store = PartitionStore(tmp_path)
    store.append_records("07-28-2025", [_record("Whip", 8)])
    partition_path = store.append_records("07-28-2025", [_record("Rune Scimitar", 100)])

    assert partition_path.read_text(encoding="utf-8").count("account_id,") == 1


def test_append_records_preserves_existing_rows(tmp_path) -> None:
    """Appends should keep earlier rows in order."""
    store = PartitionStore(tmp_path)
    store.append_records("07-28-2025", [_record("Whip", 8)])
    partition_path = store.append_records("07-28-2025", [_record("Rune Scimitar", 100)])

    table = read_partition(partition_path)

    assert [row["item_name"] for row in table.records] == ["Whip", "Rune Scimitar"]


def test_append_records_stores_derived_columns(tmp_path) -> None:
    """Stored rows should carry spent and post-tax proceeds."""
    store = PartitionStore(tmp_path)
    partition_path = store.append_records("07-28-2025", [_record("Whip", 8)])

    row = read_partition(partition_path).records[0]

    assert (row["spent"], row["received_post_tax"], row["updated_time"]) == (
        "100",
        "108",
        "2025-07-28T12:00:00Z",
    )


def test_append_records_quotes_item_names_with_commas(tmp_path) -> None:
    """Item names containing commas should round-trip through partitions."""
    store = PartitionStore(tmp_path)
    partition_path = store.append_records("07-28-2025", [_record("Dragon bones, noted", 8)])

    assert read_partition(partition_path).records[0]["item_name"] == "Dragon bones, noted"


def test_list_partition_files_missing_root_is_empty(tmp_path) -> None:
    """No partition directory should mean no partitions."""
    assert PartitionStore(tmp_path).list_partition_files() == []


def test_list_partition_files_is_sorted(tmp_path) -> None:
    """Partition discovery order should be deterministic."""
    store = PartitionStore(tmp_path)
    store.append_records("08-01-2025", [_record("Whip", 8)])
    store.append_records("07-28-2025", [_record("Whip", 8)])

    assert [path.stem for path in store.list_partition_files()] == ["07-28-2025", "08-01-2025"]


def test_read_partition_oversized_cell_raises_store_error(tmp_path) -> None:
    """Partitions that cannot be decoded should raise a store error."""
    partition_path = tmp_path / "07-28-2025.csv"
    partition_path.write_text("item_name,profit\n" + "x" * 200_000 + ",1\n", encoding="utf-8")

    with pytest.raises(TrackerStoreError):
        read_partition(partition_path)
