"""Append-only date-partitioned trade storage.

This module persists trade records into one CSV file per closing date
and lists them back for aggregation. Existing rows are never rewritten.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterator, Sequence

from core.constants import PARTITION_COLUMNS, PARTITION_FILE_EXTENSION, PARTITIONS_DIR_NAME
from core.csv_codec import CsvTable, decode, encode_records, encode_row
from core.date_keys import date_key_path_parts
from core.errors import TrackerStoreError
from core.logging_config import get_logger
from core.types import TradeRecord

_LOGGER = get_logger(__name__)


class PartitionStore:
    """Filesystem-backed partition store.

    Partitions live at ``<root>/<YYYY>/<MM>/<DD>/<MM-DD-YYYY>.csv``.
    """

    def __init__(self, data_root: Path) -> None:
        """Initialize store rooted under the data directory.

        Args:
            data_root: Runtime data root.
        """
        self._root = data_root / PARTITIONS_DIR_NAME

    @property
    def root(self) -> Path:
        """Directory holding all partitions."""
        return self._root

    def partition_path(self, date_key: str) -> Path:
        """Return the partition file path for a closing-date key.

        Args:
            date_key: ``MM-DD-YYYY`` key.

        Returns:
            Partition file path, which may not exist yet.
        """
        year, month, day = date_key_path_parts(date_key)
        return self._root / year / month / day / f"{date_key}{PARTITION_FILE_EXTENSION}"

    def append_records(self, date_key: str, records: Sequence[TradeRecord]) -> Path:
        """Append records to a date partition.

        The header row is written only when the partition is created.

        Args:
            date_key: Closing-date key shared by all records.
            records: Records to append in order.

        Returns:
            Partition file path.

        Raises:
            TrackerStoreError: If the partition cannot be written.
        """
        partition_path = self.partition_path(date_key)
        output = ""
        if not partition_path.exists():
            output += encode_row(PARTITION_COLUMNS) + "\n"
        output += encode_records(
            PARTITION_COLUMNS, (record.to_partition_row() for record in records)
        )
        try:
            partition_path.parent.mkdir(parents=True, exist_ok=True)
            with partition_path.open("a", encoding="utf-8", newline="") as handle:
                handle.write(output)
        except OSError as error:
            raise TrackerStoreError(
                f"Failed to append {len(records)} records to partition {partition_path}: {error}. "
                "Check data root permissions and re-run; the identity index was not updated."
            ) from error
        _LOGGER.info(
            "partition_appended",
            date_key=date_key,
            record_count=len(records),
            partition_path=str(partition_path),
        )
        return partition_path

    def list_partition_files(self) -> list[Path]:
        """List all partition files in depth-first path order.

        Returns:
            Sorted partition paths, empty when no partition exists yet.
        """
        if not self._root.exists():
            return []
        return sorted(
            file_path
            for file_path in self._root.rglob("*")
            if file_path.is_file() and file_path.suffix.lower() == PARTITION_FILE_EXTENSION
        )

    def iter_tables(self) -> Iterator[tuple[Path, CsvTable]]:
        """Yield every partition decoded with its own header.

        Raises:
            TrackerStoreError: If a partition cannot be read.
        """
        for partition_path in self.list_partition_files():
            yield partition_path, read_partition(partition_path)


def read_partition(partition_path: Path) -> CsvTable:
    """Read and decode one partition file.

    Args:
        partition_path: Partition CSV path.

    Returns:
        Decoded table.

    Raises:
        TrackerStoreError: If the file cannot be read or decoded.
    """
    try:
        with partition_path.open("r", encoding="utf-8", newline="") as handle:
            return decode(handle.read())
    except (OSError, csv.Error) as error:
        raise TrackerStoreError(
            f"Failed to read partition {partition_path}: {error}. "
            "Check file permissions or restore the partition from the raw archive."
        ) from error
