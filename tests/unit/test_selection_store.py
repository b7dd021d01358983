"""Selection stores (remembered location)."""

import os
from pathlib import Path

import pytest

from inventory_console.infrastructure.storage import (
    InMemorySelectionStore,
    JsonFileSelectionStore,
)


def test_in_memory_store() -> None:
    store = InMemorySelectionStore()
    assert store.load() is None
    store.save("a")
    assert store.load() == "a"


def test_json_store_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "state" / "selection.json"
    JsonFileSelectionStore(path).save("f1")
    assert JsonFileSelectionStore(path).load() == "f1"


def test_json_store_clear_removes_file(tmp_path: Path) -> None:
    store = JsonFileSelectionStore(tmp_path / "selection.json")
    store.save("f1")
    store.save(None)
    assert not store.path.exists()
    assert store.load() is None
    store.save(None)


def test_corrupt_file_reads_as_no_selection(tmp_path: Path) -> None:
    path = tmp_path / "selection.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonFileSelectionStore(path).load() is None


def test_unexpected_shape_reads_as_no_selection(tmp_path: Path) -> None:
    path = tmp_path / "selection.json"
    path.write_text('["f1"]', encoding="utf-8")
    assert JsonFileSelectionStore(path).load() is None


def test_failed_write_leaves_no_temp_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A failed rename is logged and the temp file is removed."""
    store = JsonFileSelectionStore(tmp_path / "selection.json")

    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", failing_replace)
    store.save("f1")

    assert list(tmp_path.iterdir()) == []
    assert store.load() is None
