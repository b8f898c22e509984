# Key-value storage backends.
# Created: 2026-03-02

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from linkboard.kv.file import FileKVStore
from linkboard.kv.http import HttpKVStore
from linkboard.kv.memory import MemoryKVStore
from linkboard.kv.protocol import KVStoreError, KVStoreProtocol

if TYPE_CHECKING:
    from linkboard.config import Settings

logger = logging.getLogger(__name__)

__all__ = [
    "FileKVStore",
    "HttpKVStore",
    "KVStoreError",
    "KVStoreProtocol",
    "MemoryKVStore",
    "create_kv_store",
]


def create_kv_store(settings: Settings) -> KVStoreProtocol:
    """Build the backend named by ``settings.kv_backend``."""
    backend = settings.kv_backend
    if backend == "memory":
        logger.warning("Using in-memory KV store; changes are lost on restart")
        return MemoryKVStore()
    if backend == "file":
        logger.info("Using file KV store at %s", settings.kv_file_path)
        return FileKVStore(settings.kv_file_path)
    if backend == "http":
        if not settings.kv_http_url:
            raise ValueError("kv_backend 'http' requires LINKBOARD_KV_HTTP_URL")
        logger.info("Using HTTP KV store at %s", settings.kv_http_url)
        return HttpKVStore(
            settings.kv_http_url,
            token=settings.kv_http_token,
            timeout=settings.kv_http_timeout,
        )
    raise ValueError(f"Unknown KV backend: {backend!r}")
