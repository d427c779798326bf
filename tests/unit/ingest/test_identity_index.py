"""Unit tests for identity index persistence."""

from __future__ import annotations

import pytest

from core.errors import TrackerStoreError
from ingest.identity_index import IdentityIndexStore


def test_identity_index_load_missing_returns_empty(tmp_path) -> None:
    """First run should start from an empty index."""
    assert IdentityIndexStore(tmp_path).load() == {}


def test_identity_index_save_then_load(tmp_path) -> None:
    """Saved index should load back unchanged."""
    store = IdentityIndexStore(tmp_path)
    store.save({"abc": "07-28-2025"})

    assert store.load() == {"abc": "07-28-2025"}


def test_identity_index_corrupt_file_raises(tmp_path) -> None:
    """Corrupt index files should fail instead of resetting."""
    store = IdentityIndexStore(tmp_path)
    store.index_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(TrackerStoreError):
        store.load()


def test_identity_index_rejects_non_object(tmp_path) -> None:
    """Index files must hold a JSON object."""
    store = IdentityIndexStore(tmp_path)
    store.index_path.write_text("[]", encoding="utf-8")

    with pytest.raises(TrackerStoreError):
        store.load()
