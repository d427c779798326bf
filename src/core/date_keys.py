"""Timestamp parsing and closing-date key helpers.

Partitions, the identity index, and day summaries are all keyed by a
``MM-DD-YYYY`` date string. This module owns the conversions between
raw export timestamps, aware datetimes, and those keys.
"""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Iterable

from dateutil import parser as date_parser

from core.constants import DATE_KEY_FORMAT

_PARSE_DEFAULT = datetime(1970, 1, 1)


def parse_timestamp(raw_value: str | None, zone: tzinfo) -> datetime | None:
    """Parse an export timestamp into an aware datetime.

    Args:
        raw_value: Raw timestamp cell.
        zone: Zone applied when the timestamp carries no offset.

    Returns:
        Aware datetime, or None when the value is empty or unparseable.
    """
    if raw_value is None or not raw_value.strip():
        return None
    try:
        parsed = _parse_text(raw_value.strip())
        parsed.utcoffset()
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=zone)
    return parsed


def _parse_text(text: str) -> datetime:
    """Parse ISO-8601 first, then free-form text with fixed defaults.

    Raises:
        ValueError: If neither parser accepts the text or the offset is
            out of range.
    """
    try:
        return date_parser.isoparse(text)
    except ValueError:
        return date_parser.parse(text, default=_PARSE_DEFAULT)


def format_date_key(moment: datetime | date, zone: tzinfo | None = None) -> str:
    """Format a datetime or date as a ``MM-DD-YYYY`` key.

    Args:
        moment: Aware datetime or plain date.
        zone: Zone used to pick the calendar day of an aware datetime.

    Returns:
        Zero-padded date key.
    """
    if isinstance(moment, datetime) and zone is not None:
        moment = moment.astimezone(zone)
    return moment.strftime(DATE_KEY_FORMAT)


def parse_date_key(date_key: str) -> date:
    """Parse a ``MM-DD-YYYY`` key back into a calendar date.

    Raises:
        ValueError: If the key is not a valid date key.
    """
    return datetime.strptime(date_key, DATE_KEY_FORMAT).date()


def is_date_key(value: str) -> bool:
    """Return whether a string is a valid ``MM-DD-YYYY`` key."""
    try:
        parse_date_key(value)
    except ValueError:
        return False
    return True


def sort_date_keys(date_keys: Iterable[str]) -> list[str]:
    """Sort date keys chronologically rather than lexically."""
    return sorted(date_keys, key=parse_date_key)


def date_key_path_parts(date_key: str) -> tuple[str, str, str]:
    """Split a date key into ``(YYYY, MM, DD)`` directory parts."""
    parsed = parse_date_key(date_key)
    return f"{parsed.year:04d}", f"{parsed.month:02d}", f"{parsed.day:02d}"
