"""Export row normalization.

This module turns one raw export row into a typed trade record, or
classifies why the row is skipped. Rows that cannot identify a trade
raise instead of being skipped.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Literal, Mapping

from core.constants import (
    DEFAULT_ACCOUNT_ID,
    EXPORT_ACCOUNT_COLUMN,
    EXPORT_AVG_BUY_COLUMN,
    EXPORT_AVG_SELL_COLUMN,
    EXPORT_BOUGHT_COLUMN,
    EXPORT_DELETED_COLUMN,
    EXPORT_FIRST_BUY_COLUMN,
    EXPORT_ITEM_COLUMN,
    EXPORT_LAST_SELL_COLUMN,
    EXPORT_PROFIT_COLUMN,
    EXPORT_SOLD_COLUMN,
    EXPORT_STATUS_COLUMN,
    EXPORT_TAX_COLUMN,
)
from core.date_keys import format_date_key, parse_timestamp
from core.errors import MalformedTradeRowError
from core.numeric import parse_number
from core.types import TradeRecord
from transforms.trade_identity import build_identity_hash

RowDisposition = Literal["trade", "deleted", "before_cutoff", "unclosed"]


@dataclass(frozen=True)
class NormalizedRow:
    """Normalization outcome for one export row.

    Attributes:
        disposition: ``trade`` when a record was built, else skip reason.
        record: Normalized record, set only for ``trade`` rows.
        date_key: Closing-date key, empty for skipped rows.
    """

    disposition: RowDisposition
    record: TradeRecord | None = None
    date_key: str = ""


def normalize_export_row(
    row: Mapping[str, str],
    cutoff: datetime,
    zone: tzinfo,
) -> NormalizedRow:
    """Normalize one export row.

    Args:
        row: Raw export row keyed by export header.
        cutoff: Aware instant; rows closed strictly before it are skipped.
        zone: Zone for naive timestamps and the closing-date key.

    Returns:
        Normalized row with record or skip disposition.

    Raises:
        MalformedTradeRowError: If the item name is missing or both
            timestamps are missing.
    """
    if _is_deleted(row):
        return NormalizedRow(disposition="deleted")
    opened_time = row.get(EXPORT_FIRST_BUY_COLUMN) or ""
    closed_time = row.get(EXPORT_LAST_SELL_COLUMN) or ""
    closed_at = parse_timestamp(closed_time, zone)
    if closed_at is not None and closed_at < cutoff:
        return NormalizedRow(disposition="before_cutoff")
    item_name = (row.get(EXPORT_ITEM_COLUMN) or "").strip()
    if not item_name or (not opened_time and not closed_time):
        raise MalformedTradeRowError(
            "Trade row is missing an item name or both timestamps. "
            f"Re-export the trade log before ingesting. Row: {json.dumps(dict(row), sort_keys=True)}",
            row,
        )
    if closed_at is None:
        return NormalizedRow(disposition="unclosed")
    record = build_trade_record(row, item_name, opened_time, closed_time)
    return NormalizedRow(
        disposition="trade",
        record=record,
        date_key=format_date_key(closed_at, zone),
    )


def build_trade_record(
    row: Mapping[str, str],
    item_name: str,
    opened_time: str,
    closed_time: str,
) -> TradeRecord:
    """Build a trade record with its identity hash from a validated row."""
    account_id = row.get(EXPORT_ACCOUNT_COLUMN) or DEFAULT_ACCOUNT_ID
    status = row.get(EXPORT_STATUS_COLUMN) or ""
    opened_quantity = parse_number(row.get(EXPORT_BOUGHT_COLUMN))
    closed_quantity = parse_number(row.get(EXPORT_SOLD_COLUMN))
    avg_buy_price = parse_number(row.get(EXPORT_AVG_BUY_COLUMN))
    avg_sell_price = parse_number(row.get(EXPORT_AVG_SELL_COLUMN))
    tax_paid = parse_number(row.get(EXPORT_TAX_COLUMN))
    profit = parse_number(row.get(EXPORT_PROFIT_COLUMN))
    received_post_tax = closed_quantity * avg_sell_price - tax_paid
    identity_hash = build_identity_hash(
        account_id,
        item_name,
        status,
        closed_quantity,
        received_post_tax,
        tax_paid,
        profit,
        closed_time,
    )
    return TradeRecord(
        account_id=account_id,
        item_name=item_name,
        status=status,
        opened_quantity=opened_quantity,
        closed_quantity=closed_quantity,
        avg_buy_price=avg_buy_price,
        avg_sell_price=avg_sell_price,
        tax_paid=tax_paid,
        profit=profit,
        opened_time=opened_time,
        closed_time=closed_time,
        identity_hash=identity_hash,
    )


def _is_deleted(row: Mapping[str, str]) -> bool:
    return (row.get(EXPORT_DELETED_COLUMN) or "").strip().lower() == "true"
