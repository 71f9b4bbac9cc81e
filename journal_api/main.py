"""
Daily Journal API - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn journal_api.main:app),
       or through the `daily-journal` console script (run()).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌─────────┐  │
    │  │  Req ID  │→│  Logging    │→│ GZip │→│  CORS   │  │
    │  └──────────┘ └─────────────┘ └──────┘ └─────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────────────────┐ ┌────────────────┐  │
    │  │ GET/POST/PUT/DELETE /entry │ │ GET /health    │  │
    │  └────────────────────────────┘ └────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ DB/other→500 │   │
    │  └──────────────────────────────────────────────┘   │
    │                                                     │
    │  Docs: /api-docs (Swagger UI), /redoc, /openapi.json│
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from journal_api import __version__
from journal_api.config import settings
from journal_api.database import dispose_engine
from journal_api.docs import install_openapi
from journal_api.exceptions import (
    UNEXPECTED_ERROR_MESSAGE,
    DatabaseConnectionError,
    DatabaseError,
    JournalError,
    NotFoundError,
    ValidationError,
)
from journal_api.middleware.logging import RequestLoggingMiddleware
from journal_api.middleware.request_id import RequestIDMiddleware, request_id_var
from journal_api.routes import entries, health

logger = logging.getLogger(__name__)

DOCS_URL = "/api-docs"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, report the database target and docs location.
    Shutdown: dispose the engine.

    No connection is opened here; every request connects on its own.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Daily Journal API %s starting up...", __version__)
    logger.info(
        "Database: %s (%s)",
        settings.sqlalchemy_url.render_as_string(hide_password=True),
        "pooled" if settings.db_use_pool else "connection per request",
    )
    logger.info("Server is running on port %d", settings.backend_port)
    logger.info("API docs: http://localhost:%d%s", settings.backend_port, DOCS_URL)
    logger.info("=" * 60)

    yield

    logger.info("Daily Journal API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes. Every body is {"message": ...}.

    Handler hierarchy:
        ValidationError          → 400 Bad Request
        RequestValidationError   → 400 Bad Request (malformed body / params)
        NotFoundError            → 404 Not Found
        DatabaseConnectionError  → 500 (store unreachable)
        DatabaseError            → 500
        EntryUpdateError         → 500 (via the JournalError handler)
        JournalError (base)      → 500
        Exception (fallback)     → 500, generic message, traceback logged

    Unexpected exceptions from routes are answered by RequestIDMiddleware so
    the response keeps its X-Request-ID; the Exception handler here only sees
    errors raised outside it.

    Context dicts are logged with the request ID and never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return error_response(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        )
        message = f"Invalid request: {problems}" if problems else "Invalid request"
        logger.warning("[%s] Request validation error: %s", rid, message)
        return error_response(400, message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] Not found: %s", rid, exc.context)
        return error_response(404, exc.message)

    @app.exception_handler(DatabaseConnectionError)
    async def handle_connection_error(request: Request, exc: DatabaseConnectionError):
        rid = request_id_var.get("")
        logger.error("[%s] Database connection error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(500, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(500, exc.message)

    @app.exception_handler(JournalError)
    async def handle_journal_error(request: Request, exc: JournalError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(500, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(500, UNEXPECTED_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance with its OpenAPI document
    already generated.
    """
    app = FastAPI(
        title="Daily Journal API",
        description="API for journal entry management: create, list, fetch, update and delete entries.",
        version=__version__,
        docs_url=DOCS_URL,
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(entries.router)
    app.include_router(health.router)

    install_openapi(app)

    return app


# uvicorn expects `journal_api.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve the app on BACKEND_HOST:PORT."""
    uvicorn.run(
        "journal_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
