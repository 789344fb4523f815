"""
Cross-origin boundary for the API.

Two layers are installed by ``install_cors``:

* ``CORSMiddleware`` answers preflight requests and adds the CORS
  response headers for allowed origins.
* An origin filter in front of it rejects any request whose ``Origin``
  header is present but not in the allow-list, before the request
  reaches routing or a handler.  Requests without an ``Origin`` header
  (curl, server-to-server) pass.  Preflights asking for a method or
  header outside the allow-lists get the same 403.
"""

import logging
from typing import Iterable

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization"]
# Request headers browsers may always send; CORSMiddleware accepts them too.
SAFELISTED_HEADERS = ["Accept", "Accept-Language", "Content-Language", "Content-Type"]


def is_origin_allowed(origin: str | None, allowed: Iterable[str]) -> bool:
    return not origin or origin in allowed


def is_preflight_allowed(request: Request) -> bool:
    """Check the method and headers a preflight asks for."""
    method = request.headers.get("access-control-request-method", "")
    if method.upper() not in ALLOWED_METHODS:
        return False
    permitted = {h.lower() for h in ALLOWED_HEADERS + SAFELISTED_HEADERS}
    requested = request.headers.get("access-control-request-headers", "")
    return all(h.strip().lower() in permitted for h in requested.split(",") if h.strip())


def _forbidden() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"message": "CORS not allowed"})


def install_cors(app: FastAPI, allowed_origins: list[str]) -> None:
    """Attach the CORS headers layer and the origin filter to ``app``."""
    allowed = frozenset(allowed_origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed),
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        allow_credentials=True,
    )

    # Registered after CORSMiddleware, so it runs first.  Preflights that
    # CORSMiddleware would refuse with a plain-text 400 are refused here
    # with the API's usual error body.
    @app.middleware("http")
    async def reject_unknown_origins(request: Request, call_next):
        origin = request.headers.get("origin")
        if not is_origin_allowed(origin, allowed):
            logger.warning("Rejected %s %s from origin %s", request.method, request.url.path, origin)
            return _forbidden()
        is_preflight = request.method == "OPTIONS" and "access-control-request-method" in request.headers
        if origin and is_preflight and not is_preflight_allowed(request):
            logger.warning("Rejected preflight for %s from origin %s", request.url.path, origin)
            return _forbidden()
        return await call_next(request)
