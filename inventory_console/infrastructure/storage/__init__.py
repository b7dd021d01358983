"""Storage for session preferences (selected location)."""

from inventory_console.infrastructure.storage.selection_store import (
    InMemorySelectionStore,
    JsonFileSelectionStore,
)

__all__ = ["InMemorySelectionStore", "JsonFileSelectionStore"]
