"""FastAPI application for LinkBoard.

Routes:
  GET  /              rendered homepage (cacheable; HEAD too)
  GET  /admin         static admin editor
  GET  /api/links     directory JSON
  POST /api/links     merge links / partial directory (bearer)
  GET  /api/auth      bearer probe
  POST /api/password  change the admin secret (bearer)
  OPTIONS *           CORS preflight

Everything else is a plain-text 404.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkboard import __version__
from linkboard.config import Settings, get_settings
from linkboard.directory.errors import LinkBoardError
from linkboard.directory.store import DirectoryStore
from linkboard.kv import create_kv_store
from linkboard.web import api, pages
from linkboard.web.responses import (
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    NO_CACHE_HEADERS,
    api_json,
    error_body,
)

logger = logging.getLogger(__name__)


def _cors_headers(settings: Settings, origin: str | None) -> dict[str, str]:
    if "*" in settings.allowed_origins:
        allow_origin = "*"
    elif origin and origin in settings.allowed_origins:
        allow_origin = origin
    else:
        return {}
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
        "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
    }


def create_app(settings: Settings | None = None, store: DirectoryStore | None = None) -> FastAPI:
    """Build the application.

    Both arguments are optional so uvicorn can call this as a factory; tests
    pass their own settings and a store over an in-memory backend.
    """
    settings = settings or get_settings()
    if store is None:
        store = DirectoryStore(create_kv_store(settings), settings.store_config())

    app = FastAPI(
        title="LinkBoard",
        description="Personal link directory with an embedded admin editor.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.directory_store = store

    # --- CORS -----------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )

    # --- Errors ---------------------------------------------------------
    @app.exception_handler(LinkBoardError)
    async def linkboard_error_handler(request: Request, exc: LinkBoardError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        else:
            logger.info(
                "%s %s rejected (%d): %s",
                request.method,
                request.url.path,
                exc.status_code,
                exc,
            )
        body = error_body(exc, expose_details=settings.expose_error_details)
        return api_json(body, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods on known paths look the same
        if exc.status_code in (404, 405):
            return PlainTextResponse("Not Found", status_code=404)
        return await http_exception_handler(request, exc)

    # --- Preflight ------------------------------------------------------
    # Added after CORSMiddleware so it runs first: every OPTIONS request gets
    # an empty 200, with or without CORS request headers.
    @app.middleware("http")
    async def preflight_middleware(request: Request, call_next):
        if request.method == "OPTIONS":
            headers = _cors_headers(settings, request.headers.get("Origin"))
            return Response(status_code=200, headers={**headers, **NO_CACHE_HEADERS})
        return await call_next(request)

    # --- Routes ---------------------------------------------------------
    app.include_router(api.router)
    app.include_router(pages.router)

    logger.debug("LinkBoard app created (kv=%s)", type(store.kv).__name__)
    return app
