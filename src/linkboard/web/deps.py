# Shared FastAPI dependencies for the web layer.
# Created: 2026-03-05

from __future__ import annotations

from fastapi import Request

from linkboard.config import Settings
from linkboard.directory.errors import LinkBoardError
from linkboard.directory.store import DirectoryStore


class AdminAuthError(LinkBoardError):
    """Missing or wrong bearer secret."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


def get_store(request: Request) -> DirectoryStore:
    return request.app.state.directory_store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def require_admin(request: Request) -> None:
    """FastAPI dependency that checks the bearer secret.

    Usage::

        @router.post("/links", dependencies=[Depends(require_admin)])
        async def save_links(...): ...

    The header must be exactly ``Bearer <secret>``; anything else raises
    ``AdminAuthError`` (mapped to a 401 by the app's exception handler).
    """
    store = get_store(request)
    if not await store.check_admin_secret(request.headers.get("Authorization")):
        raise AdminAuthError()
