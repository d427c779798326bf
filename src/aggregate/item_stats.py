"""Lifetime per-item statistics.

This module folds every stored trade into one rollup per item name and
writes the item stats CSV sorted by total profit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Iterable

from core.config import TrackerConfig
from core.constants import (
    ITEM_STATS_FILE_NAME,
    PARTITION_CLOSED_TIME_COLUMN,
    PARTITION_ITEM_COLUMN,
    PARTITION_PROFIT_COLUMN,
    PARTITION_SPENT_COLUMN,
)
from core.csv_codec import CsvTable
from core.date_keys import format_date_key, parse_timestamp
from core.logging_config import get_logger
from core.numeric import parse_number
from core.types import ItemRollup
from store.output_writer import write_item_stats
from store.partition_store import PartitionStore

_LOGGER = get_logger(__name__)


@dataclass
class _ItemAccumulator:
    item_name: str
    flip_count: int = 0
    total_profit: float = 0.0
    total_spent: float = 0.0
    last_flipped_at: datetime | None = None

    def add(self, profit: float, spent: float, closed_at: datetime | None) -> None:
        self.flip_count += 1
        self.total_profit += profit
        self.total_spent += spent
        if closed_at is None:
            return
        if self.last_flipped_at is None or closed_at > self.last_flipped_at:
            self.last_flipped_at = closed_at


def build_item_rollups(tables: Iterable[CsvTable], zone: tzinfo) -> list[ItemRollup]:
    """Fold partition tables into per-item rollups.

    Each table is read through its own header. Rows without an item
    name are ignored.

    Args:
        tables: Decoded partitions in fold order.
        zone: Zone for naive timestamps and the last-flipped key.

    Returns:
        Rollups sorted by total profit, highest first. Ties keep
        first-seen order.
    """
    accumulators: dict[str, _ItemAccumulator] = {}
    for table in tables:
        for row in table.records:
            item_name = (row.get(PARTITION_ITEM_COLUMN) or "").strip()
            if not item_name:
                continue
            accumulator = accumulators.setdefault(item_name, _ItemAccumulator(item_name))
            accumulator.add(
                profit=parse_number(row.get(PARTITION_PROFIT_COLUMN)),
                spent=parse_number(row.get(PARTITION_SPENT_COLUMN)),
                closed_at=parse_timestamp(row.get(PARTITION_CLOSED_TIME_COLUMN), zone),
            )
    rollups = [_to_rollup(accumulator, zone) for accumulator in accumulators.values()]
    return sorted(rollups, key=lambda rollup: -rollup.total_profit)


def run_item_stats(config: TrackerConfig) -> list[ItemRollup]:
    """Rebuild the item stats CSV from all partitions.

    Args:
        config: Runtime configuration.

    Returns:
        Rollups in written order.
    """
    store = PartitionStore(config.data_root)
    rollups = build_item_rollups((table for _, table in store.iter_tables()), config.zone)
    output_path = config.data_root / ITEM_STATS_FILE_NAME
    write_item_stats(output_path, rollups)
    _LOGGER.info("item_stats_written", item_count=len(rollups), output_path=str(output_path))
    return rollups


def _to_rollup(accumulator: _ItemAccumulator, zone: tzinfo) -> ItemRollup:
    last_flipped = ""
    if accumulator.last_flipped_at is not None:
        last_flipped = format_date_key(accumulator.last_flipped_at, zone)
    return ItemRollup(
        item_name=accumulator.item_name,
        flip_count=accumulator.flip_count,
        total_profit=accumulator.total_profit,
        total_spent=accumulator.total_spent,
        last_flipped=last_flipped,
    )
