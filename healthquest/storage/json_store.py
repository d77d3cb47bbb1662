"""Durable key-value storage for persisted aggregates

STORAGE ARCHITECTURE:
- One JSON document per key under DATA_PATH (user.json, levels.json, activity_ledger.json)
- Writes are synchronous and best-effort: a failed write is logged, never raised
- In-memory state owned by the ledgers stays authoritative until the next good write
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from healthquest.config import DATA_PATH
from healthquest.exceptions import PersistenceError

logger = logging.getLogger(__name__)

# Stable record keys
USER_KEY = "user"
LEVELS_KEY = "levels"
ACTIVITY_LEDGER_KEY = "activity_ledger"


class JsonStore:
    """Persist JSON snapshots keyed by a stable name"""

    def __init__(self, data_path: Path = DATA_PATH):
        self.data_path = Path(data_path)

    def path_for(self, key: str) -> Path:
        """Get the file backing a key"""
        return self.data_path / f"{key}.json"

    def _read(self, key: str) -> Any:
        filepath = self.path_for(key)
        try:
            return json.loads(filepath.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceError(
                f"Could not read {key} record, falling back to defaults",
                key=key,
                operation="load",
                cause=e
            ) from e

    def _write(self, key: str, payload: Any) -> Path:
        filepath = self.path_for(key)
        tmp_path = filepath.with_suffix(".json.tmp")
        try:
            self.data_path.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(payload), encoding="utf-8")
            os.replace(tmp_path, filepath)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(
                f"Could not write {key} record",
                key=key,
                operation="save",
                cause=e
            ) from e
        return filepath

    def load(self, key: str) -> Optional[Any]:
        """Load a snapshot, or None if it is missing or unreadable"""
        if not self.path_for(key).exists():
            return None

        try:
            return self._read(key)
        except PersistenceError:
            # Already logged; callers start from defaults
            return None

    def save(self, key: str, payload: Any) -> bool:
        """
        Write a snapshot atomically.

        Returns:
            True if the write completed, False if it failed (already logged)
        """
        try:
            filepath = self._write(key, payload)
        except PersistenceError:
            return False

        logger.debug(f"Saved {key} record to {filepath}")
        return True
