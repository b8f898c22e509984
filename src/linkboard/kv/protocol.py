# Key-value store protocol - the interface every storage backend implements.
# Created: 2026-03-02

from typing import Protocol


class KVStoreError(Exception):
    """A backend failed to read or write a key.

    Treated as transient by callers: reads fall back to defaults, directory
    writes are retried.
    """

    def __init__(self, message: str, *, key: str | None = None):
        super().__init__(message)
        self.key = key


class KVStoreProtocol(Protocol):
    """Protocol for key-value storage backends.

    Values are opaque strings. Reads are not guaranteed to observe a
    preceding ``put`` immediately (eventually consistent backends are fine).
    """

    async def get(self, key: str) -> str | None:
        """Return the value stored at *key*, or None if absent."""
        ...

    async def put(self, key: str, value: str) -> None:
        """Store *value* at *key*. Raises on failure."""
        ...
