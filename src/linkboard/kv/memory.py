# In-memory key-value store, for development and tests.
# Created: 2026-03-02

from __future__ import annotations


class MemoryKVStore:
    """Dict-backed store. Contents are lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"KV values must be strings, got {type(value).__name__}")
        self._data[key] = value

    def snapshot(self) -> dict[str, str]:
        """Copy of the current contents."""
        return dict(self._data)
