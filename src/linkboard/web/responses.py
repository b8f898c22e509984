# Shared response helpers - cache policy headers and error bodies.
# Created: 2026-03-05

from __future__ import annotations

import traceback
from typing import Any

from fastapi.responses import JSONResponse

from linkboard.directory.errors import DirectoryWriteError, LinkBoardError

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type", "Authorization"]


def homepage_cache_headers(max_age: int, s_max_age: int) -> dict[str, str]:
    """Cache-Control for the rendered homepage; no-store when *max_age* is 0."""
    if max_age > 0:
        return {"Cache-Control": f"public, max-age={max_age}, s-maxage={s_max_age}"}
    return dict(NO_CACHE_HEADERS)


def api_json(content: Any, status_code: int = 200) -> JSONResponse:
    """JSON response that must never be cached."""
    return JSONResponse(content=content, status_code=status_code, headers=NO_CACHE_HEADERS)


def error_body(exc: BaseException, *, expose_details: bool) -> dict[str, Any]:
    """``{"error", "cause"?, "stack"?}`` for *exc*.

    ``cause`` is the chained underlying error, so a caller can tell a store
    outage apart from a rejected request.
    """
    body: dict[str, Any] = {"error": str(exc) or type(exc).__name__}
    cause = exc.__cause__
    if isinstance(exc, DirectoryWriteError) and exc.last_error is not None:
        cause = exc.last_error
    if cause is not None:
        body["cause"] = f"{type(cause).__name__}: {cause}"
    if expose_details and not (isinstance(exc, LinkBoardError) and exc.status_code < 500):
        body["stack"] = "".join(traceback.format_exception(exc))
    return body
