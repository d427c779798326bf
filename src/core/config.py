"""Runtime configuration model for the flip tracker.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
An optional YAML settings file can overlay the same keys.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone, tzinfo
from pathlib import Path
from typing import Any, Mapping, cast
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from core.constants import (
    DEFAULT_BASELINE_DATE,
    DEFAULT_CUTOFF,
    DEFAULT_DATA_ROOT,
    DEFAULT_GOAL_NET_WORTH,
    DEFAULT_STARTING_CASH,
    DEFAULT_TIMEZONE,
)
from core.errors import TrackerConfigError

_SETTINGS_KEYS = (
    "data_root",
    "source_path",
    "timezone",
    "cutoff",
    "baseline_date",
    "goal_net_worth",
    "starting_cash",
)


@dataclass(frozen=True)
class TrackerConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Root directory for partitions, index, and outputs.
        source_path: Optional default export path.
        timezone_name: IANA zone for naive timestamps and date keys.
        cutoff: Aware instant; trades closed before it are ignored.
        baseline_date: Day-0 anchor injected into the day series.
        goal_net_worth: Net-worth goal used for percent-to-goal.
        starting_cash: Cash added to total profit for net worth.
    """

    data_root: Path
    source_path: Path | None
    timezone_name: str
    cutoff: datetime
    baseline_date: date
    goal_net_worth: float
    starting_cash: float

    @property
    def zone(self) -> tzinfo:
        """Resolved zone object for ``timezone_name``."""
        return _resolve_zone(self.timezone_name)

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TrackerConfigError: If environment values are invalid.
        """
        source_value = os.getenv("FLIP_TRACKER_SOURCE")
        return cls(
            data_root=_parse_path(os.getenv("FLIP_TRACKER_DATA_ROOT", str(DEFAULT_DATA_ROOT))),
            source_path=_parse_path(source_value) if source_value else None,
            timezone_name=_parse_timezone_name(
                os.getenv("FLIP_TRACKER_TIMEZONE", DEFAULT_TIMEZONE), "FLIP_TRACKER_TIMEZONE"
            ),
            cutoff=_parse_cutoff(os.getenv("FLIP_TRACKER_CUTOFF", DEFAULT_CUTOFF), "FLIP_TRACKER_CUTOFF"),
            baseline_date=_parse_date(
                os.getenv("FLIP_TRACKER_BASELINE_DATE", DEFAULT_BASELINE_DATE),
                "FLIP_TRACKER_BASELINE_DATE",
            ),
            goal_net_worth=_parse_positive_float(
                os.getenv("FLIP_TRACKER_GOAL_NET_WORTH", str(DEFAULT_GOAL_NET_WORTH)),
                "FLIP_TRACKER_GOAL_NET_WORTH",
            ),
            starting_cash=_parse_float(
                os.getenv("FLIP_TRACKER_STARTING_CASH", str(DEFAULT_STARTING_CASH)),
                "FLIP_TRACKER_STARTING_CASH",
            ),
        )

    def with_settings_file(self, settings_path: str) -> "TrackerConfig":
        """Overlay values from a YAML settings file.

        Args:
            settings_path: Path to a YAML mapping using snake_case keys.

        Returns:
            New config with file values applied.

        Raises:
            TrackerConfigError: If the file is missing, invalid, or has
                unknown keys.
        """
        settings = _load_settings_mapping(settings_path)
        updates: dict[str, Any] = {}
        if "data_root" in settings:
            updates["data_root"] = _parse_path(_expect_text(settings, "data_root"))
        if "source_path" in settings:
            updates["source_path"] = _parse_path(_expect_text(settings, "source_path"))
        if "timezone" in settings:
            updates["timezone_name"] = _parse_timezone_name(
                _expect_text(settings, "timezone"), "timezone"
            )
        if "cutoff" in settings:
            updates["cutoff"] = _parse_cutoff(_expect_text(settings, "cutoff"), "cutoff")
        if "baseline_date" in settings:
            updates["baseline_date"] = _parse_date(
                _expect_text(settings, "baseline_date"), "baseline_date"
            )
        if "goal_net_worth" in settings:
            updates["goal_net_worth"] = _parse_positive_float(
                _expect_text(settings, "goal_net_worth"), "goal_net_worth"
            )
        if "starting_cash" in settings:
            updates["starting_cash"] = _parse_float(
                _expect_text(settings, "starting_cash"), "starting_cash"
            )
        return replace(self, **updates)


def _load_settings_mapping(settings_path: str) -> Mapping[str, object]:
    settings_file = Path(settings_path).expanduser().resolve()
    if not settings_file.exists():
        raise TrackerConfigError(
            f"Settings file does not exist at {settings_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(settings_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise TrackerConfigError(
            f"Failed to read settings at {settings_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise TrackerConfigError(
            f"Failed to parse YAML settings at {settings_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise TrackerConfigError(
            f"Invalid settings at {settings_file}: expected a mapping, got {type(payload).__name__}."
        )
    unknown_keys = sorted(str(key) for key in set(payload) - set(_SETTINGS_KEYS))
    if unknown_keys:
        raise TrackerConfigError(
            f"Settings file {settings_file} contains unknown fields: {', '.join(unknown_keys)}. "
            f"Supported fields: {', '.join(_SETTINGS_KEYS)}."
        )
    return cast(Mapping[str, object], payload)


def _expect_text(settings: Mapping[str, object], field_name: str) -> str:
    raw_value = settings[field_name]
    if isinstance(raw_value, bool) or raw_value is None:
        raise TrackerConfigError(f"Settings field '{field_name}' must be a string or number.")
    if isinstance(raw_value, (date, datetime)):
        return raw_value.isoformat()
    return str(raw_value)


def _parse_path(raw_value: str) -> Path:
    return Path(raw_value).expanduser().resolve()


def _resolve_zone(timezone_name: str) -> tzinfo:
    if timezone_name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(timezone_name)


def _parse_timezone_name(raw_value: str, source_name: str) -> str:
    """Validate a timezone name.

    Args:
        raw_value: IANA zone name such as ``America/Chicago``.
        source_name: Env var or settings key, for error messages.

    Returns:
        The validated zone name.

    Raises:
        TrackerConfigError: If the zone is unknown.
    """
    try:
        _resolve_zone(raw_value)
    except (ZoneInfoNotFoundError, ValueError) as error:
        raise TrackerConfigError(
            f"Invalid {source_name} value: unknown timezone '{raw_value}'. "
            "Use an IANA name such as 'UTC' or 'America/Chicago'."
        ) from error
    return raw_value


def _parse_cutoff(raw_value: str, source_name: str) -> datetime:
    """Parse the cutoff instant, requiring ISO-8601.

    Naive values are interpreted as UTC.

    Raises:
        TrackerConfigError: If the value is not ISO-8601.
    """
    try:
        parsed = datetime.fromisoformat(raw_value.strip().replace("Z", "+00:00"))
    except ValueError as error:
        raise TrackerConfigError(
            f"Invalid {source_name} value: expected ISO-8601 instant, got '{raw_value}'. "
            "Use a value such as 2025-07-28T05:00:00Z."
        ) from error
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_date(raw_value: str, source_name: str) -> date:
    try:
        return date.fromisoformat(raw_value.strip())
    except ValueError as error:
        raise TrackerConfigError(
            f"Invalid {source_name} value: expected YYYY-MM-DD date, got '{raw_value}'."
        ) from error


def _parse_float(raw_value: str, source_name: str) -> float:
    try:
        return float(raw_value)
    except ValueError as error:
        raise TrackerConfigError(
            f"Invalid {source_name} value: expected number, got '{raw_value}'. "
            f"Set {source_name} to a numeric value."
        ) from error


def _parse_positive_float(raw_value: str, source_name: str) -> float:
    value = _parse_float(raw_value, source_name)
    if value <= 0:
        raise TrackerConfigError(
            f"Invalid {source_name} value: expected a positive number, got '{raw_value}'."
        )
    return value
