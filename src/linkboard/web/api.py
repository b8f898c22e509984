# API router - directory read/write, auth probe and password change.
# Created: 2026-03-05

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request

from linkboard.directory.errors import InvalidAdminSecret, InvalidDirectoryPayload
from linkboard.directory.store import DirectoryStore
from linkboard.web.deps import get_store, require_admin
from linkboard.web.responses import api_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["API"])


async def _json_body(request: Request, error_cls: type[Exception]):
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise error_cls("Request body is not valid JSON") from e


@router.get("/links")
async def get_links(store: DirectoryStore = Depends(get_store)):
    """The current directory, defaults filled in."""
    directory = await store.read_directory()
    return api_json(directory.to_dict())


@router.post("/links", dependencies=[Depends(require_admin)])
async def save_links(request: Request, store: DirectoryStore = Depends(get_store)):
    """Merge a link list or a partial directory into the stored record."""
    payload = await _json_body(request, InvalidDirectoryPayload)
    await store.write_directory(payload)
    return api_json({"success": True})


@router.get("/auth")
async def check_auth(request: Request, store: DirectoryStore = Depends(get_store)):
    """Let the admin page validate a secret before using it."""
    if not await store.check_admin_secret(request.headers.get("Authorization")):
        return api_json({"authenticated": False}, status_code=401)
    return api_json({"authenticated": True})


@router.post("/password", dependencies=[Depends(require_admin)])
async def change_password(request: Request, store: DirectoryStore = Depends(get_store)):
    """Replace the admin secret stored in the KV backend."""
    body = await _json_body(request, InvalidAdminSecret)
    if not isinstance(body, dict):
        raise InvalidAdminSecret("Invalid password")
    await store.write_admin_secret(body.get("password"))
    return api_json({"success": True})
