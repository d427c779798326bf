"""Derived output persistence helpers.

This module isolates CSV and JSON writes for item stats, day
summaries, the summary index, and the meta summary. Aggregators stay
focused on folding partitions.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from core.constants import ITEM_STATS_COLUMNS, SUMMARY_FILE_EXTENSION
from core.csv_codec import encode_row
from core.date_keys import is_date_key, sort_date_keys
from core.errors import TrackerStoreError
from core.numeric import json_number
from core.types import DayRollup, ItemRollup, MetaSummary


def write_item_stats(output_path: Path, rollups: Sequence[ItemRollup]) -> None:
    """Write the item stats CSV, replacing any previous file.

    Args:
        output_path: Destination CSV path.
        rollups: Rollups in output order.
    """
    lines = [encode_row(ITEM_STATS_COLUMNS)]
    for rollup in rollups:
        lines.append(
            encode_row(
                (
                    rollup.item_name,
                    rollup.flip_count,
                    rollup.total_profit,
                    rollup.total_spent,
                    rollup.roi_percent,
                    rollup.avg_profit_per_flip,
                    rollup.last_flipped,
                )
            )
        )
    _write_text(output_path, "\n".join(lines) + "\n")


def write_day_summary(summary_dir: Path, rollup: DayRollup) -> Path:
    """Write one day rollup as its own JSON file.

    Args:
        summary_dir: Directory holding day summaries.
        rollup: Day rollup to persist.

    Returns:
        Written file path.
    """
    output_path = summary_dir / f"{rollup.date}{SUMMARY_FILE_EXTENSION}"
    _write_json(output_path, day_rollup_to_payload(rollup))
    return output_path


def write_meta(output_path: Path, meta: MetaSummary) -> None:
    """Write the global meta summary JSON."""
    _write_json(output_path, meta_to_payload(meta))


def write_summary_index(output_path: Path, date_keys: Sequence[str]) -> None:
    """Write the chronologically sorted list of day-summary keys."""
    _write_json(output_path, list(date_keys))


def list_summary_keys(summary_dir: Path) -> list[str]:
    """List day-summary keys present on disk.

    Args:
        summary_dir: Directory holding day summaries.

    Returns:
        Keys sorted by calendar date, empty if the directory is absent.
        Files whose stem is not a date key are ignored.
    """
    if not summary_dir.is_dir():
        return []
    keys = [
        file_path.stem
        for file_path in summary_dir.iterdir()
        if file_path.is_file()
        and file_path.suffix.lower() == SUMMARY_FILE_EXTENSION
        and is_date_key(file_path.stem)
    ]
    return sort_date_keys(keys)


def day_rollup_to_payload(rollup: DayRollup) -> dict[str, Any]:
    """Serialize a day rollup into a JSON-safe payload."""
    return {
        "date": rollup.date,
        "day_offset": rollup.day_offset,
        "flip_count": rollup.flip_count,
        "distinct_item_count": rollup.distinct_item_count,
        "profit": json_number(rollup.profit),
        "roi_percent": json_number(rollup.roi_percent),
        "running_net_worth": json_number(rollup.running_net_worth),
        "percent_to_goal": json_number(rollup.percent_to_goal),
        "percent_change": json_number(rollup.percent_change),
    }


def meta_to_payload(meta: MetaSummary) -> dict[str, Any]:
    """Serialize the meta summary into a JSON-safe payload."""
    return {
        "last_updated": meta.last_updated,
        "total_flip_count": meta.total_flip_count,
        "total_profit": json_number(meta.total_profit),
        "net_worth": json_number(meta.net_worth),
    }


def _write_json(output_path: Path, payload: object) -> None:
    _write_text(output_path, json.dumps(payload, indent=2) + "\n")


def _write_text(output_path: Path, text: str) -> None:
    """Write an output file, creating parent directories.

    Raises:
        TrackerStoreError: If the file cannot be written.
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as error:
        raise TrackerStoreError(
            f"Failed to write output {output_path}: {error}. "
            "Check data root permissions; outputs are rebuilt on the next run."
        ) from error
