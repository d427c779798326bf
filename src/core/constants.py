"""Core constants used across flip tracker modules.

This module centralizes file layout names, column names, and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path("data")
DEFAULT_TIMEZONE = "UTC"
DEFAULT_CUTOFF = "2025-07-28T05:00:00Z"
DEFAULT_BASELINE_DATE = "2025-07-27"
DEFAULT_GOAL_NET_WORTH = 2_147_000_000.0
DEFAULT_STARTING_CASH = 1000.0
DEFAULT_ACCOUNT_ID = "default"

PARTITIONS_DIR_NAME = "processed-flips"
RAW_ARCHIVE_DIR_NAME = "raw-input"
DAILY_SUMMARY_DIR_NAME = "daily-summary"
IDENTITY_INDEX_FILE_NAME = "flip-index.json"
ITEM_STATS_FILE_NAME = "item-stats.csv"
META_FILE_NAME = "meta.json"
SUMMARY_INDEX_FILE_NAME = "summary-index.json"
ARCHIVE_FILE_PREFIX = "flips-export"
PARTITION_FILE_EXTENSION = ".csv"
SUMMARY_FILE_EXTENSION = ".json"

HASH_ALGORITHM = "sha256"
DATE_KEY_FORMAT = "%m-%d-%Y"

EXPORT_ITEM_COLUMN = "Item"
EXPORT_ACCOUNT_COLUMN = "Account"
EXPORT_STATUS_COLUMN = "Status"
EXPORT_BOUGHT_COLUMN = "Bought"
EXPORT_SOLD_COLUMN = "Sold"
EXPORT_AVG_BUY_COLUMN = "Avg. buy price"
EXPORT_AVG_SELL_COLUMN = "Avg. sell price"
EXPORT_TAX_COLUMN = "Tax"
EXPORT_PROFIT_COLUMN = "Profit"
EXPORT_FIRST_BUY_COLUMN = "First buy time"
EXPORT_LAST_SELL_COLUMN = "Last sell time"
EXPORT_DELETED_COLUMN = "deleted"

PARTITION_ITEM_COLUMN = "item_name"
PARTITION_SPENT_COLUMN = "spent"
PARTITION_PROFIT_COLUMN = "profit"
PARTITION_CLOSED_TIME_COLUMN = "closed_time"

PARTITION_COLUMNS = (
    "account_id",
    PARTITION_ITEM_COLUMN,
    "status",
    "opened_quantity",
    PARTITION_SPENT_COLUMN,
    "closed_quantity",
    "received_post_tax",
    "tax_paid",
    PARTITION_PROFIT_COLUMN,
    "opened_time",
    PARTITION_CLOSED_TIME_COLUMN,
    "updated_time",
    "flip_hash",
)
ITEM_STATS_COLUMNS = (
    "item_name",
    "flips",
    "total_profit",
    "total_spent",
    "roi_percent",
    "avg_profit_per_flip",
    "last_flipped",
)
