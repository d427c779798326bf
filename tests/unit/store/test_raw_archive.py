"""Unit tests for the raw export archive."""

from __future__ import annotations

from datetime import date

from store.raw_archive import archive_export


def test_archive_export_uses_dated_path(tmp_path) -> None:
    """Archives should be stored under a year, month, and day path."""
    archive_path = archive_export(tmp_path, "Item\r\nWhip\r\n", date(2025, 7, 30))

    assert archive_path == (
        tmp_path / "raw-input" / "2025" / "07" / "30" / "flips-export-07-30-2025.csv"
    )


def test_archive_export_keeps_line_endings(tmp_path) -> None:
    """Archived text should keep the export's original line endings."""
    archive_path = archive_export(tmp_path, "Item\r\nWhip\r\n", date(2025, 7, 30))

    assert archive_path.read_bytes() == b"Item\r\nWhip\r\n"


def test_archive_export_same_day_replaces_previous(tmp_path) -> None:
    """A same-day rerun should overwrite the earlier archive."""
    archive_export(tmp_path, "first", date(2025, 7, 30))
    archive_path = archive_export(tmp_path, "second", date(2025, 7, 30))

    assert archive_path.read_text(encoding="utf-8") == "second"
