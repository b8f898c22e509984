# HTTP KV Store - client for a remote REST key-value service.
# Created: 2026-03-04
#
# Wire format:
#   GET {base_url}/values/{key}   -> 200 raw value | 404 absent
#   PUT {base_url}/values/{key}   <- raw value as the request body

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from linkboard.kv.protocol import KVStoreError

logger = logging.getLogger(__name__)


class HttpKVStore:
    """Key-value store backed by a remote HTTP service.

    Every transport error and every non-2xx response (other than 404 on
    ``get``) is raised as ``KVStoreError``.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _url(self, key: str) -> str:
        return f"{self.base_url}/values/{quote(key, safe='')}"

    def _headers(self) -> dict[str, str]:
        if self._token:
            return {"Authorization": f"Bearer {self._token}"}
        return {}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def get(self, key: str) -> str | None:
        try:
            async with self._client() as client:
                resp = await client.get(self._url(key), headers=self._headers())
        except httpx.HTTPError as e:
            raise KVStoreError(f"GET {key!r} failed: {e}", key=key) from e

        if resp.status_code == 404:
            return None
        if resp.is_error:
            raise KVStoreError(f"GET {key!r} returned HTTP {resp.status_code}", key=key)
        return resp.text

    async def put(self, key: str, value: str) -> None:
        headers = {**self._headers(), "Content-Type": "text/plain; charset=utf-8"}
        try:
            async with self._client() as client:
                resp = await client.put(
                    self._url(key), content=value.encode("utf-8"), headers=headers
                )
        except httpx.HTTPError as e:
            raise KVStoreError(f"PUT {key!r} failed: {e}", key=key) from e

        if resp.is_error:
            raise KVStoreError(
                f"PUT {key!r} returned HTTP {resp.status_code}: {resp.text[:200]}", key=key
            )
        logger.debug("PUT %s -> HTTP %d", key, resp.status_code)
