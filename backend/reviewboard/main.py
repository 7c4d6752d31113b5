"""
Review Board Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its own ReviewService; the module-level `app` is the one
       uvicorn serves.
Who:   uvicorn (`reviewboard.main:app`), the console script, and tests
       (which call create_app() with Settings pointing at a temp database).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────────────┐         │
    │  │  CORS    │→│ Req ID   │→│  Logging     │         │
    │  └──────────┘ └──────────┘ └──────────────┘         │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────┐ ┌───────────────────────┐     │
    │  │ GET/POST reviews │ │ DELETE delete-review  │     │
    │  └──────────────────┘ └───────────────────────┘     │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ DB→500 │ 405 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → open store → create table → seed id counter.
              Any store failure here is fatal; the server exits.
    Shutdown: close the shared connection.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reviewboard import __version__
from reviewboard.config import Settings, settings as default_settings
from reviewboard.exceptions import (
    DatabaseError,
    NotFoundError,
    ReviewBoardError,
    ValidationError,
)
from reviewboard.middleware.cors import CORSHeadersMiddleware, apply_cors_headers
from reviewboard.middleware.logging import RequestLoggingMiddleware
from reviewboard.middleware.request_id import RequestIDMiddleware, request_id_var
from reviewboard.routes import health, reviews
from reviewboard.services.review_service import ReviewService
from reviewboard.store import ReviewStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure process-wide logging to stdout.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Start the ReviewService before serving and stop it afterwards.

    A ReviewBoardError during startup (store cannot be opened, schema
    cannot be created, max id cannot be read) is logged and re-raised,
    which makes uvicorn abort instead of serving a broken store.
    """
    config: Settings = app.state.settings
    service: ReviewService = app.state.review_service

    setup_logging(config.log_level)
    logger.info("Review Board backend starting up...")

    try:
        await service.start()
    except ReviewBoardError as e:
        logger.critical("Startup failed: %s | Context: %s", e.message, e.context)
        await service.stop()
        raise

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)

    yield

    logger.info("Review Board backend shutting down...")
    await service.stop()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    return {
        "error": error,
        "message": message,
        "details": details,
        "request_id": request_id_var.get(""),
    }


def _allowed_methods(request: Request) -> str:
    """
    Every method routed for the request path, for the Allow header of a 405.

    Starlette only reports the methods of the first route whose path
    matched, and GET and POST /reviews are separate routes.
    """
    path = request.scope["path"]
    methods = {"OPTIONS"}
    for route in request.app.router.routes:
        route_methods = getattr(route, "methods", None)
        path_regex = getattr(route, "path_regex", None)
        if route_methods and path_regex is not None and path_regex.match(path):
            methods.update(route_methods)
    return ", ".join(sorted(methods))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error body.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        NotFoundError                            → 404
        StarletteHTTPException                   → its own status (405 for bad verbs)
        DatabaseError                            → 500, generic message
        Exception (fallback)                     → 500, generic message

    5xx bodies never carry internal details; those are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed JSON or wrong field types: a 400, not FastAPI's default 422."""
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "validation_error",
                "Invalid request payload",
                {"errors": jsonable_encoder(exc.errors())},
            ),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            code = "method_not_allowed"
            headers = {"Allow": _allowed_methods(request)}
        else:
            code = "not_found" if exc.status_code == 404 else "http_error"
            headers = getattr(exc, "headers", None)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(code, str(exc.detail)),
            headers=headers,
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for unexpected errors.

        Starlette runs this handler outside the middleware stack, so the
        CORS headers are applied here explicitly.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        response = JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
            ),
        )
        return apply_cors_headers(response)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; the module-level singleton if omitted.

    Returns:
        A FastAPI app whose ReviewService is started by its lifespan.
    """
    config = settings or default_settings

    app = FastAPI(
        title="Review Board API",
        description="Submit, list and delete short text reviews with a 1-5 star rating.",
        version=__version__,
        lifespan=lifespan,
    )

    store = ReviewStore(config.database_url, echo=config.log_level == "DEBUG")
    app.state.settings = config
    app.state.review_service = ReviewService(store)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = outermost = first to execute
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(CORSHeadersMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(reviews.router)
    app.include_router(health.router)

    return app


app = create_app()
