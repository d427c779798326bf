"""Incremental trade selection against the identity index.

This module decides which export rows are new trades. It is pure: the
caller's index is never mutated and nothing is written, so a fatal row
leaves stored state untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Iterable, Mapping

from core.logging_config import get_logger
from core.types import TradeRecord
from transforms.trade_normalization import RowDisposition, normalize_export_row

_LOGGER = get_logger(__name__)


@dataclass
class IncrementalSelection:
    """Selection output for one export.

    Attributes:
        records_by_date: New records grouped by closing-date key, in
            export order.
        identity_index: Prior index plus the new hashes.
        duplicate_count: Rows whose hash was already known.
        deleted_count: Rows flagged deleted.
        before_cutoff_count: Rows closed before the cutoff.
        unclosed_count: Rows without a parseable closing time.
    """

    records_by_date: dict[str, list[TradeRecord]] = field(default_factory=dict)
    identity_index: dict[str, str] = field(default_factory=dict)
    duplicate_count: int = 0
    deleted_count: int = 0
    before_cutoff_count: int = 0
    unclosed_count: int = 0

    @property
    def accepted_count(self) -> int:
        """Number of new records across all dates."""
        return sum(len(records) for records in self.records_by_date.values())


def select_new_records(
    rows: Iterable[Mapping[str, str]],
    identity_index: Mapping[str, str],
    cutoff: datetime,
    zone: tzinfo,
) -> IncrementalSelection:
    """Select new trades and group them by closing date.

    A hash seen earlier in the same export counts as a duplicate too.

    Args:
        rows: Raw export rows.
        identity_index: Persisted identity index.
        cutoff: Aware instant; earlier trades are skipped.
        zone: Zone for naive timestamps and date keys.

    Returns:
        Selection with grouped records and the augmented index.

    Raises:
        MalformedTradeRowError: If a row cannot identify a trade.
    """
    selection = IncrementalSelection(identity_index=dict(identity_index))
    for row in rows:
        normalized = normalize_export_row(row, cutoff, zone)
        record = normalized.record
        if record is None:
            _count_skipped(selection, normalized.disposition, row)
            continue
        if record.identity_hash in selection.identity_index:
            selection.duplicate_count += 1
            continue
        selection.records_by_date.setdefault(normalized.date_key, []).append(record)
        selection.identity_index[record.identity_hash] = normalized.date_key
    return selection


def _count_skipped(
    selection: IncrementalSelection,
    disposition: RowDisposition,
    row: Mapping[str, str],
) -> None:
    if disposition == "deleted":
        selection.deleted_count += 1
    elif disposition == "before_cutoff":
        selection.before_cutoff_count += 1
    else:
        selection.unclosed_count += 1
        _LOGGER.debug("trade_row_skipped", reason="unclosed", item_name=row.get("Item"))
