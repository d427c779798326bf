"""Per-day summaries with a running net-worth series.

This module folds every stored trade by closing date, injects the
baseline day, and computes running totals in one chronological pass.
Each day is written as its own JSON file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, tzinfo
from typing import Iterable

from core.config import TrackerConfig
from core.constants import (
    DAILY_SUMMARY_DIR_NAME,
    PARTITION_CLOSED_TIME_COLUMN,
    PARTITION_ITEM_COLUMN,
    PARTITION_PROFIT_COLUMN,
    PARTITION_SPENT_COLUMN,
)
from core.csv_codec import CsvTable
from core.date_keys import format_date_key, parse_date_key, parse_timestamp, sort_date_keys
from core.logging_config import get_logger
from core.numeric import parse_number
from core.types import DayRollup
from store.output_writer import write_day_summary
from store.partition_store import PartitionStore

_LOGGER = get_logger(__name__)


@dataclass
class _DayAccumulator:
    flip_count: int = 0
    total_profit: float = 0.0
    total_spent: float = 0.0
    item_names: set[str] = field(default_factory=set)


def build_day_rollups(
    tables: Iterable[CsvTable],
    zone: tzinfo,
    baseline_date: date,
    goal_net_worth: float,
) -> list[DayRollup]:
    """Fold partition tables into chronological day rollups.

    Args:
        tables: Decoded partitions in fold order.
        zone: Zone for naive timestamps and date keys.
        baseline_date: Day-0 anchor, always present with zero values.
        goal_net_worth: Goal used for percent-to-goal.

    Returns:
        One rollup per date, oldest first.
    """
    accumulators: dict[str, _DayAccumulator] = {format_date_key(baseline_date): _DayAccumulator()}
    unparseable_count = 0
    for table in tables:
        for row in table.records:
            closed_at = parse_timestamp(row.get(PARTITION_CLOSED_TIME_COLUMN), zone)
            if closed_at is None:
                unparseable_count += 1
                continue
            accumulator = accumulators.setdefault(
                format_date_key(closed_at, zone), _DayAccumulator()
            )
            accumulator.flip_count += 1
            accumulator.total_profit += parse_number(row.get(PARTITION_PROFIT_COLUMN))
            accumulator.total_spent += parse_number(row.get(PARTITION_SPENT_COLUMN))
            item_name = (row.get(PARTITION_ITEM_COLUMN) or "").strip()
            if item_name:
                accumulator.item_names.add(item_name)
    if unparseable_count:
        _LOGGER.warning("partition_rows_without_closing_time", row_count=unparseable_count)
    return _accumulate_running_totals(accumulators, baseline_date, goal_net_worth)


def run_day_summaries(config: TrackerConfig) -> list[DayRollup]:
    """Rebuild every day summary file from all partitions.

    Args:
        config: Runtime configuration.

    Returns:
        Written rollups, oldest first.
    """
    store = PartitionStore(config.data_root)
    rollups = build_day_rollups(
        (table for _, table in store.iter_tables()),
        config.zone,
        config.baseline_date,
        config.goal_net_worth,
    )
    summary_dir = config.data_root / DAILY_SUMMARY_DIR_NAME
    for rollup in rollups:
        write_day_summary(summary_dir, rollup)
    _LOGGER.info(
        "day_summaries_written",
        summary_count=len(rollups),
        summary_dir=str(summary_dir),
    )
    return rollups


def _accumulate_running_totals(
    accumulators: dict[str, _DayAccumulator],
    baseline_date: date,
    goal_net_worth: float,
) -> list[DayRollup]:
    """Compute running net worth and day-over-day change in date order."""
    rollups: list[DayRollup] = []
    running_net_worth = 0.0
    previous_net_worth = 0.0
    for date_key in sort_date_keys(accumulators):
        accumulator = accumulators[date_key]
        running_net_worth += accumulator.total_profit
        percent_change = 0.0
        if previous_net_worth != 0:
            percent_change = (running_net_worth - previous_net_worth) / previous_net_worth * 100
        roi_percent = 0.0
        if accumulator.total_spent != 0:
            roi_percent = accumulator.total_profit / accumulator.total_spent * 100
        rollups.append(
            DayRollup(
                date=date_key,
                day_offset=(parse_date_key(date_key) - baseline_date).days,
                flip_count=accumulator.flip_count,
                distinct_item_count=len(accumulator.item_names),
                profit=accumulator.total_profit,
                roi_percent=roi_percent,
                running_net_worth=running_net_worth,
                percent_to_goal=running_net_worth / goal_net_worth * 100,
                percent_change=percent_change,
            )
        )
        previous_net_worth = running_net_worth
    return rollups
