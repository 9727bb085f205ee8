"""
storage.py
----------
Client-side key/value persistence backed by a single JSON file.

Every ``set`` is flushed to disk immediately so that progress survives
the process being torn down at any point. Passing ``path=None`` keeps
everything in memory (used by tests and by hosts without a writable
filesystem).
"""

import copy
import json
import os
from typing import Any, Optional

from pixel_commando.core.debug.debug_logger import DebugLogger


class KeyValueStore:
    """Persistent string-keyed store of JSON-compatible values."""

    def __init__(self, path: Optional[str] = None):
        """
        Args:
            path: JSON file to read and write, or None for memory only
        """
        self.path = path
        self._data = self._load()

    # ===========================================================
    # Public API
    # ===========================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Return a deep copy of the stored value, or default if absent."""
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> bool:
        """
        Store a value and flush to disk.

        Returns:
            bool: False if the flush failed (the value is still kept in memory)
        """
        self._data[key] = copy.deepcopy(value)
        return self.flush()

    def remove(self, key: str) -> bool:
        """Delete a key if present and flush."""
        if self._data.pop(key, None) is None:
            return True
        return self.flush()

    def flush(self) -> bool:
        """Write the whole store to disk."""
        if self.path is None:
            return True

        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2)
            os.replace(tmp_path, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            DebugLogger.warn(f"Failed to write {self.path}: {e}", category="progress")
            return False

    # ===========================================================
    # Loading
    # ===========================================================

    def _load(self) -> dict:
        """Read the store file. Missing or malformed files start empty."""
        if self.path is None or not os.path.exists(self.path):
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            DebugLogger.warn(f"Failed to read {self.path}: {e} - starting empty", category="progress")
            return {}

        if not isinstance(data, dict):
            DebugLogger.warn(f"Ignoring non-object store in {self.path}", category="progress")
            return {}

        DebugLogger.system(f"Loaded store {self.path}", category="progress")
        return data
