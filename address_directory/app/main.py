"""
Main entrypoint for the Address Directory API.

This module assembles the FastAPI application.  ``create_app`` wires
the layers explicitly: settings -> logging -> store -> service ->
router.  It also registers the handlers that turn domain exceptions
into HTTP responses.  An application built from the default settings
is created at import time as ``app``, so it can be served directly::

    uvicorn address_directory.app.main:app --reload

Pending database migrations are applied when the application starts
(lifespan startup), not at import.
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import create_api_router
from .core.config import Settings, settings as default_settings
from .core.db import get_database_path, init_db
from .core.exceptions import NotFoundError, RecordValidationError, StoreUnavailableError
from .core.logging_config import setup_logging
from .repositories.address_store import AddressStore, utc_now
from .schemas.address import field_errors
from .services.address_mapper import AddressMapper
from .services.address_service import AddressService

logger = logging.getLogger(__name__)


def _validation_response(errors: list) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation failed", "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and validation errors to JSON responses."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _validation_response(field_errors(exc.errors(), skip_prefix=True))

    @app.exception_handler(RecordValidationError)
    async def record_validation_handler(request: Request, exc: RecordValidationError) -> JSONResponse:
        return _validation_response(exc.errors)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": str(exc)})

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
        logger.error("Store unavailable while handling %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(
    app_settings: Optional[Settings] = None,
    clock: Callable = utc_now,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to build from.  Defaults to the module-level
        settings read from the environment.
    clock : Callable
        Source of timestamps for the store.

    Returns
    -------
    FastAPI
        A configured application instance.
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings)

    database_path = get_database_path(app_settings.database_url)
    store = AddressStore(database_path, clock=clock)
    service = AddressService(store, AddressMapper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        version = init_db(database_path)
        logger.info("Database %s at schema version %s", database_path, version)
        yield

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.address_service = service

    register_exception_handlers(app)
    app.include_router(create_api_router(service), prefix="/api")

    @app.get("/health", tags=["health"])
    def health() -> dict:
        service.check_health()
        return {"status": "ok", "name": app_settings.project_name, "version": app_settings.api_version}

    return app


app = create_app()
