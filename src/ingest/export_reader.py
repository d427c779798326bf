"""Trade-log export reader.

This module loads the raw export text from a local path. Locating the
export is left to the caller; read failures are fatal.
"""

from __future__ import annotations

from pathlib import Path

from core.errors import TrackerIngestError


def read_export_text(source_path: str | Path) -> str:
    """Read a raw export file as text.

    Args:
        source_path: Local export file path.

    Returns:
        File contents exactly as stored.

    Raises:
        TrackerIngestError: If the path is missing or unreadable.
    """
    export_path = Path(source_path).expanduser()
    if not export_path.is_file():
        raise TrackerIngestError(
            f"Failed to read trade export at {export_path}: file does not exist. "
            "Export the trade log and pass its path, or set FLIP_TRACKER_SOURCE."
        )
    try:
        with export_path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as error:
        raise TrackerIngestError(
            f"Failed to read trade export at {export_path}: {error}. "
            "Check file permissions and that the export is UTF-8 encoded."
        ) from error
