"""Directory store - read/normalize and read-merge-write over a KV backend.

Created: 2026-03-03

Reads never fail: a store error, a missing record, or malformed JSON all fall
back to the built-in directory. Writes re-read the current record, merge the
payload on top and put the result, retrying with linear backoff.

There is no locking and no version stamp. Two concurrent writers both merge
onto the state they read and the last put wins.
"""

from __future__ import annotations

import asyncio
import hmac
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from linkboard.directory import codec
from linkboard.directory.errors import (
    AdminSecretWriteError,
    DirectoryWriteError,
    InvalidAdminSecret,
    InvalidDirectoryPayload,
)
from linkboard.directory.models import Directory, Ok, Outcome, Recovered, default_directory
from linkboard.kv.protocol import KVStoreProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    """Knobs for DirectoryStore. Tests use ``retry_base_delay=0``."""

    data_key: str = "data"
    admin_secret_key: str = "ADMIN_PASSWORD"
    configured_admin_secret: str | None = None
    default_admin_secret: str = "admin"
    max_retries: int = 3
    retry_base_delay: float = 0.2  # seconds; attempt N waits N * base before retrying


class DirectoryStore:
    """Store Accessor for the directory record and the admin secret."""

    def __init__(
        self,
        kv: KVStoreProtocol,
        config: StoreConfig | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.kv = kv
        self.config = config or StoreConfig()
        self._sleep = sleep

    # =========================================================================
    # Directory
    # =========================================================================

    async def read_directory_result(self) -> Outcome[Directory]:
        """Read and normalize the directory, reporting any fallback."""
        try:
            raw = await self.kv.get(self.config.data_key)
        except Exception as e:
            logger.error("KV get %r failed, using defaults: %s", self.config.data_key, e)
            return Recovered(default_directory(), e, "store read failed")

        if not raw:
            return Recovered(default_directory(), None, "no record")

        try:
            shape = codec.decode(raw)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning("Stored directory is not valid JSON, using defaults: %s", e)
            return Recovered(default_directory(), e, "malformed record")

        if isinstance(shape, codec.Unrecognized):
            logger.warning(
                "Stored directory is a JSON %s, using defaults", type(shape.value).__name__
            )
            return Recovered(default_directory(), None, "unrecognized record")

        return Ok(codec.merge(default_directory(), shape))

    async def read_directory(self) -> Directory:
        """Current directory with defaults filled in. Never raises."""
        result = await self.read_directory_result()
        return result.value

    async def write_directory(self, payload: Any) -> Directory:
        """Merge *payload* onto the current directory and persist it.

        *payload* is either a list (replaces ``links``) or an object whose
        top-level fields replace the stored ones. Returns the merged record.

        Raises:
            InvalidDirectoryPayload: payload is neither a list nor an object.
            DirectoryWriteError: every put attempt failed.
        """
        shape = codec.classify(payload)
        if isinstance(shape, codec.Unrecognized):
            raise InvalidDirectoryPayload("Invalid data format")

        current = await self.read_directory()
        merged = codec.merge(current, shape)
        await self._put_with_retry(self.config.data_key, codec.encode(merged))
        logger.info(
            "Directory saved: %d links, %d categories",
            len(merged.links),
            len(merged.categories),
        )
        return merged

    async def _put_with_retry(self, key: str, value: str) -> None:
        attempts = max(1, self.config.max_retries)
        last_error: Exception | None = None
        for attempt in range(1, attempts + 1):
            try:
                await self.kv.put(key, value)
                return
            except Exception as e:
                last_error = e
                logger.warning("KV put %r failed (attempt %d/%d): %s", key, attempt, attempts, e)
                if attempt < attempts:
                    await self._sleep(self.config.retry_base_delay * attempt)

        raise DirectoryWriteError(
            str(last_error) or type(last_error).__name__,
            attempts=attempts,
            last_error=last_error,
        ) from last_error

    # =========================================================================
    # Admin secret
    # =========================================================================

    async def read_admin_secret_result(self) -> Outcome[str]:
        """Resolve the admin secret: store, then configuration, then the default."""
        error: Exception | None = None
        try:
            value = await self.kv.get(self.config.admin_secret_key)
            if isinstance(value, str) and value:
                return Ok(value)
        except Exception as e:
            logger.debug("KV get %r failed: %s", self.config.admin_secret_key, e)
            error = e

        if self.config.configured_admin_secret:
            return Recovered(self.config.configured_admin_secret, error, "configured")
        return Recovered(self.config.default_admin_secret, error, "built-in default")

    async def read_admin_secret(self) -> str:
        """Current admin secret. Never raises."""
        result = await self.read_admin_secret_result()
        return result.value

    async def write_admin_secret(self, new_secret: Any) -> None:
        """Persist a new admin secret. No retry.

        Raises:
            InvalidAdminSecret: *new_secret* is empty or not a string.
            AdminSecretWriteError: the store rejected the put.
        """
        if not isinstance(new_secret, str) or not new_secret:
            raise InvalidAdminSecret("Invalid password")
        try:
            await self.kv.put(self.config.admin_secret_key, new_secret)
        except Exception as e:
            raise AdminSecretWriteError(str(e) or type(e).__name__) from e
        logger.info("Admin secret updated")

    async def check_admin_secret(self, authorization: str | None) -> bool:
        """True when *authorization* is exactly ``Bearer <secret>``."""
        if not authorization:
            return False
        expected = f"Bearer {await self.read_admin_secret()}"
        return hmac.compare_digest(authorization.encode("utf-8"), expected.encode("utf-8"))

