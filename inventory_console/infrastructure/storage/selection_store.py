"""Stores for the selected location (the console's remembered scope).

The JSON file store writes atomically (temp file + rename) and treats an
unreadable file as "no selection".
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

_SELECTION_KEY = "selected_location_id"


class InMemorySelectionStore:
    """Selection kept for the life of the process."""

    def __init__(self, location_id: str | None = None) -> None:
        self._location_id = location_id

    def load(self) -> str | None:
        return self._location_id

    def save(self, location_id: str | None) -> None:
        self._location_id = location_id


class JsonFileSelectionStore:
    """Selection persisted to a small JSON file across sessions."""

    def __init__(self, path: str | Path) -> None:
        """Initialize with the file path (parent directories are created on save)."""
        self.path = Path(path)

    def load(self) -> str | None:
        """Return the saved location id, or None if absent or unreadable."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cannot read selection file %s: %s", self.path, e)
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt selection file %s", self.path)
            return None
        value = data.get(_SELECTION_KEY) if isinstance(data, dict) else None
        return value if isinstance(value, str) and value else None

    def save(self, location_id: str | None) -> None:
        """Write the selection; None removes the file."""
        try:
            if location_id is None:
                self.path.unlink(missing_ok=True)
                return
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".tmp_", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump({_SELECTION_KEY: location_id}, f)
                os.replace(tmp_path, self.path)
            finally:
                if Path(tmp_path).exists():
                    os.unlink(tmp_path)
        except OSError as e:
            logger.warning("Cannot save selection to %s: %s", self.path, e)
