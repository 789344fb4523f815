"""
Main entrypoint for the Event Booking API.

This module assembles the FastAPI application: logging, the store
client and password hasher, the CORS boundary, error translation and
the routers mounted under ``/api``.  ``create_app`` builds the app and
an instance is created at import time as ``app``, so it can be served
with::

    uvicorn event_booking_api.app.main:app
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.cors import install_cors
from .core.db import Database
from .core.errors import AppError, StoreError
from .core.logging_config import setup_logging
from .core.security import PasswordHasher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # The pool lives exactly as long as the server process.
    app.state.db.open()
    try:
        yield
    finally:
        app.state.db.close()


def register_exception_handlers(app: FastAPI) -> None:
    """Translate errors into ``{"message": ...}`` responses.

    Store failure details and unexpected exceptions are logged here and
    nowhere else; clients only ever see the public message.
    """

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if isinstance(exc, StoreError):
            logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed JSON, wrong body shape and non-integer ids all end up here.
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request body.", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Server error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the environment-derived
        ``core.config.settings``.

    Returns
    -------
    FastAPI
        A configured application.  The database is opened when the
        application starts up, not here.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.db = Database(settings.database_url, pool_size=settings.db_pool_size, timeout=settings.db_timeout)
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    register_exception_handlers(app)
    install_cors(app, settings.allowed_origin_list)

    # Added last so it is the outermost layer and also sees rejected origins.
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("request %s %s", request.method, request.url.path)
        response = await call_next(request)
        logger.info("response %s %s status %s", request.method, request.url.path, response.status_code)
        return response

    app.include_router(api_router, prefix="/api")
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
