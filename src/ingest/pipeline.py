"""Ingest orchestration for trade-log exports.

This module coordinates export decoding, incremental selection,
partition appends, identity index persistence, and raw archiving.
"""

from __future__ import annotations

import csv
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from core.config import TrackerConfig
from core.csv_codec import decode
from core.errors import TrackerIngestError
from core.logging_config import get_logger
from core.types import IngestResult
from ingest.export_reader import read_export_text
from ingest.identity_index import IdentityIndexStore
from ingest.incremental_ingest import IncrementalSelection, select_new_records
from store.partition_store import PartitionStore
from store.raw_archive import archive_export

_LOGGER = get_logger(__name__)
_BYTE_ORDER_MARK = "\ufeff"


class RecordIngestor:
    """Runner for one ingest pass over an export."""

    def __init__(
        self,
        config: TrackerConfig,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config
        self._clock = clock or _utc_now
        self._partitions = PartitionStore(config.data_root)
        self._index_store = IdentityIndexStore(config.data_root)

    def run(self, export_text: str) -> IngestResult:
        """Ingest export text and return outcome counts.

        Writes happen only after every row is validated: partitions
        first, then the full identity index, then the raw archive.

        Args:
            export_text: Raw export CSV text.

        Returns:
            Ingest outcome counts.

        Raises:
            MalformedTradeRowError: If a row cannot identify a trade.
            TrackerIngestError: If the export is not decodable CSV.
            TrackerStoreError: If partitions, index, or archive fail.
        """
        try:
            table = decode(export_text.lstrip(_BYTE_ORDER_MARK))
        except csv.Error as error:
            raise TrackerIngestError(
                f"Failed to decode trade export: {error}. "
                "Re-export the trade log; no partitions or index were written."
            ) from error
        if not table.header:
            _LOGGER.warning("export_empty", data_root=str(self._config.data_root))
            return IngestResult()
        identity_index = self._index_store.load()
        selection = select_new_records(
            table.records,
            identity_index,
            self._config.cutoff,
            self._config.zone,
        )
        self._append_partitions(selection)
        self._index_store.save(selection.identity_index)
        archived_on = self._clock().astimezone(self._config.zone).date()
        archive_path = archive_export(self._config.data_root, export_text, archived_on)
        result = _build_result(selection, archive_path)
        _log_ingest_completion(len(table.records), result)
        return result

    def _append_partitions(self, selection: IncrementalSelection) -> None:
        for date_key, records in selection.records_by_date.items():
            self._partitions.append_records(date_key, records)


def ingest_export(
    source_path: str | Path,
    config: TrackerConfig,
    clock: Callable[[], datetime] | None = None,
) -> IngestResult:
    """Read an export file and ingest it into the partition store.

    Args:
        source_path: Local export file path.
        config: Runtime configuration.
        clock: Optional clock for the archive date.

    Returns:
        Ingest outcome counts.

    Raises:
        TrackerIngestError: If the export cannot be read or a row is
            malformed.
        TrackerStoreError: If persistence fails.
    """
    export_text = read_export_text(source_path)
    _LOGGER.info("export_loaded", source_path=str(source_path), size=len(export_text))
    return RecordIngestor(config, clock).run(export_text)


def _build_result(selection: IncrementalSelection, archive_path: Path) -> IngestResult:
    return IngestResult(
        accepted_count=selection.accepted_count,
        duplicate_count=selection.duplicate_count,
        deleted_count=selection.deleted_count,
        before_cutoff_count=selection.before_cutoff_count,
        unclosed_count=selection.unclosed_count,
        records_by_date={
            date_key: len(records) for date_key, records in selection.records_by_date.items()
        },
        index_size=len(selection.identity_index),
        archive_path=str(archive_path),
    )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _log_ingest_completion(row_count: int, result: IngestResult) -> None:
    """Log ingest completion with contextual counts."""
    _LOGGER.info(
        "ingest_completed",
        row_count=row_count,
        accepted_count=result.accepted_count,
        duplicate_count=result.duplicate_count,
        deleted_count=result.deleted_count,
        before_cutoff_count=result.before_cutoff_count,
        unclosed_count=result.unclosed_count,
        dates_with_new_records=len(result.records_by_date),
        index_size=result.index_size,
        archive_path=result.archive_path,
    )
