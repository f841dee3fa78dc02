"""
AttnViz Backend: FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes service construction, middleware registration, route
       mounting and lifecycle management in one place.
How:   Factory pattern: create_app() builds the TextStore and
       VisualizationService, stores them on app.state (the routes resolve
       them through dependencies) and returns the configured app.
Who:   uvicorn (uvicorn attnviz.main:app), `python -m attnviz`, and the tests.

Application Architecture:
    Middleware (outermost first):  RequestID → Logging → CORS
    Routes:                        /api/texts[/{id}]  /api/visualize  /health
    Exception Handlers:
        ValidationError → 400   DecodeError → 400   NotFoundError → 404
        StoreError → 500        anything else → 500

    Error bodies are plain text, matching what the frontend displays.

Lifecycle:
    Startup:   configure logging, create the `texts` table if absent
    Shutdown:  dispose the engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from attnviz import __version__
from attnviz.config import Settings, settings
from attnviz.exceptions import (
    AttnVizError,
    DecodeError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from attnviz.middleware.logging import RequestLoggingMiddleware
from attnviz.middleware.request_id import RequestIDMiddleware, request_id_var
from attnviz.routes import health, texts, visualize
from attnviz.services.relevance import VisualizationService
from attnviz.services.text_store import TextStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] attnviz.access: GET /api/texts 200 3.1ms [ab12cd34] from 127.0.0.1

    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,  # Override any existing logging config
    )

    # Third-party libraries log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then the idempotent `CREATE TABLE IF NOT EXISTS texts`.
    Shutdown: dispose the engine.

    A schema failure aborts startup; the service cannot do anything useful
    without its table.
    """
    app_settings: Settings = app.state.settings
    store: TextStore = app.state.text_store

    setup_logging(app_settings.log_level)
    logger.info("AttnViz Backend %s starting up...", __version__)

    await store.create_schema()

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)

    yield

    logger.info("AttnViz Backend shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, message: str) -> PlainTextResponse:
    return PlainTextResponse(
        message,
        status_code=status_code,
        headers={"X-Request-ID": request_id_var.get("")},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes.

        ValidationError  → 400    DecodeError → 400
        NotFoundError    → 404
        StoreError       → 500 (underlying error text in the body)
        AttnVizError     → 500 (catch-all for custom errors)
        Exception        → 500 (generic message, stack trace logged)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, exc.message)

    @app.exception_handler(DecodeError)
    async def handle_decode_error(request: Request, exc: DecodeError):
        logger.warning("[%s] Decode error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, exc.message)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error(
            "[%s] Store error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(500, exc.message)

    @app.exception_handler(AttnVizError)
    async def handle_app_error(request: Request, exc: AttnVizError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return _error_response(500, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic body, full stack trace in the server log only."""
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[TextStore] = None,
    visualizer: Optional[VisualizationService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings:  Settings to use (defaults to the environment-loaded singleton)
        store:         TextStore to serve (defaults to one built from app_settings)
        visualizer:    VisualizationService to serve (defaults to the placeholder scorer)

    Returns:
        Fully configured FastAPI instance.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="AttnViz API",
        description=(
            "Save short texts and visualize token-by-token relevance matrices."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.text_store = store or TextStore.from_settings(app_settings)
    app.state.visualizer = visualizer or VisualizationService()

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(texts.router)
    app.include_router(visualize.router)
    app.include_router(health.router)

    return app


# uvicorn expects `attnviz.main:app` to be importable
app = create_app()
