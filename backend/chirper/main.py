"""
Chirper Backend: FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn chirper.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌────────┐ ┌──────────┐   │
    │  │  Req ID  │→│ Logging │→│  GZip  │→│   CORS   │   │
    │  └──────────┘ └─────────┘ └────────┘ └──────────┘   │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌─────────────┐ ┌────────────┐  │
    │  │POST /api/tweets│ │GET /api/user│ │GET /health │  │
    │  └────────────────┘ └─────────────┘ └────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Auth→401 │ Validation→422 │ Internal/DB→500   │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, check security settings, log readiness
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from chirper import __version__
from chirper.config import settings
from chirper.database import dispose_engine
from chirper.exceptions import (
    AuthenticationError,
    ChirperError,
    InternalError,
    ValidationError,
)
from chirper.middleware.logging import RequestLoggingMiddleware
from chirper.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from chirper.routes import health, tweets, users

logger = logging.getLogger(__name__)

# Body of every 5xx response; details go to the log only.
SERVER_ERROR_BODY = {"message": "Server Error"}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup, before anything else logs.
    Format:  %(asctime)s [%(levelname)s] %(name)s: %(message)s
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

    # Third-party libraries that log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Runs startup code before the yield and shutdown code after it."""
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Chirper Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: development runs with the default secret.
        logger.error("Configuration error: %s", str(e))

    logger.info("Validation messages locale: %s", settings.app_locale)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Chirper Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        AuthenticationError  → 401 {"message": "Unauthenticated."}
        ValidationError      → 422 {"message": ..., "errors": {field: [...]}}
        InternalError        → 500 {"message": "Server Error"}
        ChirperError (base)  → 500 {"message": "Server Error"}
        Exception (fallback) → 500 {"message": "Server Error"}

    Exception context (SQL errors, user ids, token failure reasons) is logged
    and never returned.
    """

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        rid = request_id_var.get("")
        logger.info("[%s] Unauthenticated request to %s: %s", rid, request.url.path, exc.reason)
        return JSONResponse(
            status_code=401,
            content={"message": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent invalid input; list every failing rule per field."""
        rid = request_id_var.get("")
        logger.warning("[%s] Validation failed for fields %s", rid, sorted(exc.errors))
        return JSONResponse(
            status_code=422,
            content={"message": exc.message, "errors": exc.errors},
        )

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context,
        )
        return JSONResponse(status_code=500, content=SERVER_ERROR_BODY)

    @app.exception_handler(ChirperError)
    async def handle_chirper_error(request: Request, exc: ChirperError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=SERVER_ERROR_BODY)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all: stack trace to the log, generic body to the client.

        Starlette runs this handler in ServerErrorMiddleware, outside
        RequestIDMiddleware, so the correlation header is set here. The id
        is read from request.state, which shares the ASGI scope.
        """
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=SERVER_ERROR_BODY,
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Chirper API",
        description="Backend for a minimal Twitter clone: post short text tweets.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition; RequestID is added
    # last so it runs first.
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
    app.include_router(tweets.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `chirper.main:app` to be importable
app = create_app()
