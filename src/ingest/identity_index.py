"""Identity index persistence.

This module stores the identity hash to closing-date mapping that makes
ingest idempotent across runs. The index only ever grows.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.constants import IDENTITY_INDEX_FILE_NAME
from core.errors import TrackerStoreError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class IdentityIndexStore:
    """Filesystem-backed identity index store."""

    def __init__(self, data_root: Path) -> None:
        self._index_path = data_root / IDENTITY_INDEX_FILE_NAME

    @property
    def index_path(self) -> Path:
        """Identity index JSON path."""
        return self._index_path

    def load(self) -> dict[str, str]:
        """Load the index, or an empty one on first run.

        Returns:
            Mapping of identity hash to ``MM-DD-YYYY`` key.

        Raises:
            TrackerStoreError: If the index file exists but is invalid.
        """
        if not self._index_path.exists():
            return {}
        try:
            payload = json.loads(self._index_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as error:
            raise TrackerStoreError(
                f"Failed to read identity index at {self._index_path}: {error}. "
                "Restore the index from backup; deleting it will re-ingest every archived trade."
            ) from error
        if not isinstance(payload, dict):
            raise TrackerStoreError(
                f"Failed to read identity index at {self._index_path}: "
                "expected JSON object at top level."
            )
        return {str(key): str(value) for key, value in payload.items()}

    def save(self, index: dict[str, str]) -> None:
        """Persist the full index, replacing the previous file.

        Args:
            index: Complete identity index.

        Raises:
            TrackerStoreError: If the index cannot be written.
        """
        temp_path = self._index_path.with_suffix(".json.tmp")
        try:
            self._index_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(index, indent=2) + "\n", encoding="utf-8")
            temp_path.replace(self._index_path)
        except OSError as error:
            raise TrackerStoreError(
                f"Failed to write identity index at {self._index_path}: {error}. "
                "Partitions were already appended; re-running will duplicate this run's trades."
            ) from error
        _LOGGER.info("identity_index_saved", index_size=len(index), index_path=str(self._index_path))
