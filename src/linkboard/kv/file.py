"""File-based key-value store.

Created: 2026-03-02

Storage layout:
~/.linkboard/kv.json    # {"<key>": "<string value>", ...}

Design notes:
- One JSON object holds every key (the service only uses two)
- The file is re-read on every ``get``: no in-memory cache, so several
  server processes sharing the file see each other's writes
- Atomic writes using temp file + rename
"""

import json
import logging
from pathlib import Path
from typing import Any

from linkboard.kv.protocol import KVStoreError

logger = logging.getLogger(__name__)


class FileKVStore:
    """Key-value store persisted to a single JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise KVStoreError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise KVStoreError(f"{self.path} does not hold a JSON object")
        return data

    def _save(self, data: dict[str, Any]) -> None:
        temp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self.path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise KVStoreError(f"Cannot write {self.path}: {e}") from e

    async def get(self, key: str) -> str | None:
        value = self._load().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            logger.warning("Non-string value at key %r in %s, ignoring", key, self.path)
            return None
        return value

    async def put(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
        logger.debug("Wrote key %r to %s (%d bytes)", key, self.path, len(value))
