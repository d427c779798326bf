"""Raw export archive for audit and replay."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from core.constants import ARCHIVE_FILE_PREFIX, PARTITION_FILE_EXTENSION, RAW_ARCHIVE_DIR_NAME
from core.date_keys import date_key_path_parts, format_date_key
from core.errors import TrackerStoreError


def archive_export(data_root: Path, export_text: str, archived_on: date) -> Path:
    """Copy raw export text verbatim under a date-stamped path.

    A second archive on the same day replaces the first.

    Args:
        data_root: Runtime data root.
        export_text: Export text exactly as read.
        archived_on: Calendar date used for the path.

    Returns:
        Archive file path.

    Raises:
        TrackerStoreError: If the archive cannot be written.
    """
    date_key = format_date_key(archived_on)
    year, month, day = date_key_path_parts(date_key)
    archive_dir = data_root / RAW_ARCHIVE_DIR_NAME / year / month / day
    archive_path = archive_dir / f"{ARCHIVE_FILE_PREFIX}-{date_key}{PARTITION_FILE_EXTENSION}"
    try:
        archive_dir.mkdir(parents=True, exist_ok=True)
        with archive_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(export_text)
    except OSError as error:
        raise TrackerStoreError(
            f"Failed to archive raw export to {archive_path}: {error}. "
            "Partitions and the identity index are already up to date."
        ) from error
    return archive_path
