"""
Main entrypoint for the Student Management API.

This module assembles the FastAPI application: it sets up logging,
applies database migrations, wires the repository and service
together, includes the versioned routers and registers the exception
handlers that turn errors into the uniform error body.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn student_management_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from functools import partial
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import get_connection, get_database_path, init_db
from .core.exceptions import (
    GENERIC_ERROR_MESSAGE,
    StudentServiceError,
    build_error_body,
    status_for,
)
from .core.logging_config import setup_logging
from .repositories.student_repository import StudentRepository
from .services.student_service import StudentService

logger = logging.getLogger(__name__)


def build_student_service(config: Settings) -> StudentService:
    """Create the database if needed and return a service bound to it."""
    db_path = get_database_path(config)
    init_db(db_path)
    repository = StudentRepository(partial(get_connection, db_path))
    return StudentService(repository)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Map errors to HTTP responses in one place."""

    @app.exception_handler(StudentServiceError)
    async def student_error_handler(request: Request, exc: StudentServiceError) -> JSONResponse:
        status = status_for(exc)
        logger.warning("%s: %s", status.phrase, exc.message)
        return JSONResponse(
            status_code=status,
            content=build_error_body(status, exc.message, request.url.path),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed payloads are client errors, same as a missing field.
        status = HTTPStatus.BAD_REQUEST
        message = _validation_message(exc)
        logger.warning("Invalid request on %s: %s", request.url.path, message)
        return JSONResponse(
            status_code=status,
            content=build_error_body(status, message, request.url.path),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Raised by the router itself, e.g. unknown path or unsupported method.
        status = HTTPStatus(exc.status_code)
        return JSONResponse(
            status_code=status,
            content=build_error_body(status, str(exc.detail), request.url.path),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error on %s", request.url.path)
        status = status_for(exc)
        return JSONResponse(
            status_code=status,
            content=build_error_body(status, GENERIC_ERROR_MESSAGE, request.url.path),
        )


def create_app(
    config: Optional[Settings] = None,
    service: Optional[StudentService] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    config : Optional[Settings]
        Settings to use; defaults to the module-level ``settings``.
    service : Optional[StudentService]
        Pre-built service.  When omitted one is built at startup
        against the configured SQLite database, applying migrations
        first.
    """
    config = config or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(config.log_level, config.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "student_service", None) is None:
            # Applies migrations, creating the database file if needed.
            app.state.student_service = build_student_service(config)
        yield

    app = FastAPI(
        title=config.project_name,
        version=config.api_version,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.student_service = service

    app.include_router(v1_router, prefix="/api/v1")
    register_exception_handlers(app)

    @app.get("/", include_in_schema=False)
    def root() -> dict:
        return {"status": f"{config.project_name} running", "version": config.api_version}

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
