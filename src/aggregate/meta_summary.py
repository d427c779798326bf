"""Global meta summary and day-summary index.

This module totals profit and trade count across every partition and
lists which day summaries exist.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable

from core.config import TrackerConfig
from core.constants import (
    DAILY_SUMMARY_DIR_NAME,
    META_FILE_NAME,
    PARTITION_PROFIT_COLUMN,
    SUMMARY_INDEX_FILE_NAME,
)
from core.csv_codec import CsvTable
from core.logging_config import get_logger
from core.numeric import parse_number
from core.types import MetaSummary
from store.output_writer import list_summary_keys, write_meta, write_summary_index
from store.partition_store import PartitionStore

_LOGGER = get_logger(__name__)


def compute_meta_summary(
    tables: Iterable[CsvTable],
    starting_cash: float,
    updated_at: datetime,
) -> MetaSummary:
    """Total trades and profit across partitions.

    Tables whose header has no ``profit`` column are skipped.

    Args:
        tables: Decoded partitions.
        starting_cash: Cash added to total profit for net worth.
        updated_at: Aware timestamp recorded as ``last_updated``.

    Returns:
        Global meta summary.
    """
    total_flip_count = 0
    total_profit = 0.0
    for table in tables:
        if PARTITION_PROFIT_COLUMN not in table.header:
            continue
        for row in table.records:
            total_profit += parse_number(row.get(PARTITION_PROFIT_COLUMN))
            total_flip_count += 1
    return MetaSummary(
        last_updated=_format_utc_timestamp(updated_at),
        total_flip_count=total_flip_count,
        total_profit=total_profit,
        net_worth=total_profit + starting_cash,
    )


def run_meta(
    config: TrackerConfig,
    clock: Callable[[], datetime] | None = None,
) -> MetaSummary:
    """Rebuild the meta summary JSON from all partitions.

    Args:
        config: Runtime configuration.
        clock: Optional clock for ``last_updated``.

    Returns:
        Written meta summary.
    """
    store = PartitionStore(config.data_root)
    updated_at = clock() if clock else datetime.now(timezone.utc)
    meta = compute_meta_summary(
        (table for _, table in store.iter_tables()),
        config.starting_cash,
        updated_at,
    )
    output_path = config.data_root / META_FILE_NAME
    write_meta(output_path, meta)
    _LOGGER.info(
        "meta_written",
        total_flip_count=meta.total_flip_count,
        total_profit=meta.total_profit,
        net_worth=meta.net_worth,
        output_path=str(output_path),
    )
    return meta


def run_summary_index(config: TrackerConfig) -> list[str]:
    """Rebuild the summary index from day-summary files on disk."""
    date_keys = list_summary_keys(config.data_root / DAILY_SUMMARY_DIR_NAME)
    write_summary_index(config.data_root / SUMMARY_INDEX_FILE_NAME, date_keys)
    return date_keys


def _format_utc_timestamp(moment: datetime) -> str:
    utc_moment = moment.astimezone(timezone.utc)
    return utc_moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
