"""Shared typed models.

This module defines immutable data models used by ingest, store,
aggregation, and SDK layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class TradeRecord:
    """One completed trade normalized from an export row.

    Attributes:
        account_id: Trading account, ``default`` when absent.
        item_name: Trimmed item name.
        status: Export status, passed through.
        opened_quantity: Units bought.
        closed_quantity: Units sold.
        avg_buy_price: Average buy price per unit.
        avg_sell_price: Average sell price per unit.
        tax_paid: Sale tax paid.
        profit: Profit as reported by the export.
        opened_time: Raw first-buy timestamp.
        closed_time: Raw last-sell timestamp.
        identity_hash: Content hash used as primary and dedup key.
    """

    account_id: str
    item_name: str
    status: str
    opened_quantity: float
    closed_quantity: float
    avg_buy_price: float
    avg_sell_price: float
    tax_paid: float
    profit: float
    opened_time: str
    closed_time: str
    identity_hash: str

    @property
    def spent(self) -> float:
        """Total buy cost."""
        return self.opened_quantity * self.avg_buy_price

    @property
    def received_post_tax(self) -> float:
        """Sale proceeds after tax."""
        return self.closed_quantity * self.avg_sell_price - self.tax_paid

    @property
    def updated_time(self) -> str:
        """Last update timestamp, identical to the closing time."""
        return self.closed_time

    def to_partition_row(self) -> dict[str, object]:
        """Return the record keyed by partition column name."""
        return {
            "account_id": self.account_id,
            "item_name": self.item_name,
            "status": self.status,
            "opened_quantity": self.opened_quantity,
            "spent": self.spent,
            "closed_quantity": self.closed_quantity,
            "received_post_tax": self.received_post_tax,
            "tax_paid": self.tax_paid,
            "profit": self.profit,
            "opened_time": self.opened_time,
            "closed_time": self.closed_time,
            "updated_time": self.updated_time,
            "flip_hash": self.identity_hash,
        }


@dataclass(frozen=True)
class IngestResult:
    """Outcome counts of one ingest run.

    Attributes:
        accepted_count: New records appended to partitions.
        duplicate_count: Rows already present in the identity index.
        deleted_count: Rows flagged deleted in the export.
        before_cutoff_count: Rows closed before the configured cutoff.
        unclosed_count: Rows without a parseable closing time.
        records_by_date: New record counts per closing-date key.
        index_size: Identity index size after the run.
        archive_path: Where the raw export was archived, if written.
    """

    accepted_count: int = 0
    duplicate_count: int = 0
    deleted_count: int = 0
    before_cutoff_count: int = 0
    unclosed_count: int = 0
    records_by_date: Mapping[str, int] = field(default_factory=dict)
    index_size: int = 0
    archive_path: str | None = None


@dataclass(frozen=True)
class ItemRollup:
    """Lifetime statistics for one item.

    Attributes:
        item_name: Trimmed item name.
        flip_count: Number of trades.
        total_profit: Summed profit.
        total_spent: Summed buy cost.
        last_flipped: ``MM-DD-YYYY`` key of the latest closing time.
    """

    item_name: str
    flip_count: int
    total_profit: float
    total_spent: float
    last_flipped: str

    @property
    def roi_percent(self) -> float:
        """Profit over spent as a percentage, 0 when nothing was spent."""
        if self.total_spent == 0:
            return 0.0
        return self.total_profit / self.total_spent * 100

    @property
    def avg_profit_per_flip(self) -> float:
        """Mean profit per trade, 0 when there are no trades."""
        if self.flip_count == 0:
            return 0.0
        return self.total_profit / self.flip_count


@dataclass(frozen=True)
class DayRollup:
    """Per-closing-date summary with running net worth.

    Attributes:
        date: ``MM-DD-YYYY`` key.
        day_offset: Whole days since the baseline date.
        flip_count: Trades closed that day.
        distinct_item_count: Distinct item names traded that day.
        profit: Summed profit for the day.
        roi_percent: Day profit over day spent as a percentage.
        running_net_worth: Cumulative profit through this day.
        percent_to_goal: Running net worth over the goal, as a percentage.
        percent_change: Change vs the previous day's running net worth.
    """

    date: str
    day_offset: int
    flip_count: int
    distinct_item_count: int
    profit: float
    roi_percent: float
    running_net_worth: float
    percent_to_goal: float
    percent_change: float


@dataclass(frozen=True)
class MetaSummary:
    """Global totals across all partitions.

    Attributes:
        last_updated: ISO-8601 UTC timestamp of the computation.
        total_flip_count: Number of stored trades.
        total_profit: Summed profit.
        net_worth: Total profit plus starting cash.
    """

    last_updated: str
    total_flip_count: int
    total_profit: float
    net_worth: float


@dataclass(frozen=True)
class PipelineReport:
    """Counts and timings from one full pipeline run.

    Attributes:
        ingest: Ingest step outcome.
        item_count: Rows written to the item stats output.
        summary_count: Day summaries written.
        meta: Global meta summary.
        step_seconds: Wall time per step name.
    """

    ingest: IngestResult
    item_count: int
    summary_count: int
    meta: MetaSummary
    step_seconds: Mapping[str, float] = field(default_factory=dict)
