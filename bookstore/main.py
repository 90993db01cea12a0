"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests pass their own settings and repository

2. Lifespan Events
   - startup: build the repository. For the database backend this
     creates the connection pool, probes it and bootstraps the schema.
     Any failure there is fatal: uvicorn exits before accepting requests.
   - shutdown: close the connection pool (once)

3. Exception Handlers
   - Convert repository and validation errors to HTTP responses
   - Every error body is {"message": "..."}
   - Store failures are logged where they happen; callers only see a
     short message
"""

import json
import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.bootstrap import SEED_BOOKS, bootstrap_database
from bookstore.config import Settings, get_settings
from bookstore.database import DatabasePool, create_pool
from bookstore.exceptions import (
    BookNotFoundError,
    BookValidationError,
    InvalidBookIdError,
    PoolClosedError,
    StoreFailureError,
)
from bookstore.repositories import (
    BookRepository,
    InMemoryBookRepository,
    SQLBookRepository,
)
from bookstore.routers import books_router

logger = logging.getLogger(__name__)


# =============================================================================
# Logging Configuration
# =============================================================================
def configure_logging(settings: Settings) -> None:
    """Configure root logging once, at the configured level."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# =============================================================================
# Responses
# =============================================================================
class IndentedJSONResponse(JSONResponse):
    """JSON response rendered with 4-space indentation."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=4,
            separators=(",", ": "),
        ).encode("utf-8")


def message_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    """Build the {"message": ...} envelope used by every error response."""
    return IndentedJSONResponse(
        status_code=status_code,
        content={"message": message},
        headers=headers,
    )


# =============================================================================
# Repository Setup
# =============================================================================
def build_repository(settings: Settings) -> tuple[BookRepository, Optional[DatabasePool]]:
    """
    Create the repository for the configured storage backend.

    Returns:
        The repository, and the pool backing it (None for memory storage)

    Raises:
        StartupError: If the pool or the schema cannot be set up
    """
    if not settings.uses_database:
        logger.info("Using in-memory book storage")
        return InMemoryBookRepository(seed=SEED_BOOKS), None

    pool = create_pool(settings)
    try:
        bootstrap_database(pool)
    except Exception:
        pool.close()
        raise
    return SQLBookRepository(pool), pool


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown

    A repository passed to create_app() is used as is; its owner is
    responsible for closing it.
    """
    settings: Settings = app.state.settings

    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")

    pool: Optional[DatabasePool] = None
    if app.state.repository is None:
        app.state.repository, pool = build_repository(settings)

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    if pool is not None:
        pool.close()


# =============================================================================
# Application Factory
# =============================================================================
def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[BookRepository] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to get_settings()
        repository: Ready repository to serve from; when omitted, the
            lifespan handler builds one from settings

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="CRUD API for a single book collection.",
        version="1.0.0",
        default_response_class=IndentedJSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repository = repository

    # -------------------------------------------------------------------------
    # Request Logging
    # -------------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} "
            f"{response.status_code} {duration_ms:.1f}ms"
        )
        return response

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Render body decoding errors as 400."""
        return message_response(status.HTTP_400_BAD_REQUEST, "invalid request")

    @app.exception_handler(InvalidBookIdError)
    async def invalid_book_id_handler(
        request: Request,
        exc: InvalidBookIdError,
    ) -> JSONResponse:
        return message_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(BookValidationError)
    async def book_validation_handler(
        request: Request,
        exc: BookValidationError,
    ) -> JSONResponse:
        return message_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(BookNotFoundError)
    async def book_not_found_handler(
        request: Request,
        exc: BookNotFoundError,
    ) -> JSONResponse:
        return message_response(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(StoreFailureError)
    async def store_failure_handler(
        request: Request,
        exc: StoreFailureError,
    ) -> JSONResponse:
        """Already logged by the repository; only the safe message is sent."""
        return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Unknown routes and unsupported methods get the same envelope."""
        return message_response(exc.status_code, str(exc.detail), exc.headers)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        logger.error(f"Database error: {exc}")
        return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "database error")

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all: log the traceback, hide the details."""
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return message_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error"
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check that the API is running and its store is reachable.",
    )
    def health_check(request: Request):
        """
        Health check endpoint.

        For database storage the pool is probed with SELECT 1; a failed
        probe returns 503.
        """
        current = request.app.state.repository
        if isinstance(current, SQLBookRepository):
            try:
                current.pool.ping()
            except (SQLAlchemyError, PoolClosedError) as e:
                logger.warning(f"Health check failed: {e}")
                return message_response(
                    status.HTTP_503_SERVICE_UNAVAILABLE, "database unavailable"
                )
            storage = "database"
        else:
            storage = "memory"
        return {"status": "healthy", "storage": storage}

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookstore.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookstore.main

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "bookstore.main:app",
        host=settings.host,
        port=settings.port,
    )
