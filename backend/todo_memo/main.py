"""
Todo Memo Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers, routers and the
       static asset mount, and returns the configured app.
Who:   uvicorn (todo_memo.main:app, or the `todo-memo` console script) and
       the test suite (create_app(store=...)).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────────────────┐ ┌──────────┐          │
    │  │ Request Logging + Req ID │→│  CORS    │          │
    │  └──────────────────────────┘ └──────────┘          │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /api/todos   │ │ GET /api     │ │ GET /health │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │  Static assets at "/" (when STATIC_DIR exists)      │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Store/*→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the configured store (unless one was injected)
    3. Start the background connection report

    Shutdown:
    1. Cancel the connection report if still running
    2. Close the store
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from todo_memo import __version__
from todo_memo.config import settings
from todo_memo.database import attach_store, close_store, open_store
from todo_memo.exceptions import NotFoundError, StoreError, TodoMemoError, ValidationError
from todo_memo.middleware.logging import RequestLoggingMiddleware, request_id_var
from todo_memo.routes import health, todos
from todo_memo.services.todo_store import TodoStore
from todo_memo.services.validation import format_error

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Called once from the lifespan handler, before the store is opened.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,  # Override any existing logging config
    )

    # todo_memo.access already records every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    # Driver heartbeat and topology chatter
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the todo store on startup and close it on shutdown.

    The connection check runs in the background, so the server accepts
    requests immediately even when the database is slow to answer.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Todo Memo Backend %s starting up...", __version__)

    bootstrap = await open_store(app)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Todo Memo Backend shutting down...")
    await close_store(app, bootstrap)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str, request_id: str = "") -> JSONResponse:
    headers = {"X-Request-ID": request_id} if request_id else None
    return JSONResponse(
        status_code=status_code, content={"errorMessage": message}, headers=headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes. Every body is `{"errorMessage": ...}`.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (body is not valid JSON)
        NotFoundError           → 404 Not Found
        StoreError              → 500 (generic message, details logged)
        TodoMemoError (base)    → 500
        Exception (fallback)    → 500 (stack trace logged)

    Stack traces and driver messages are never part of a response.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = exc.errors()
        if errors and errors[0].get("type") == "json_invalid":
            message = "Request body is not valid JSON"
        elif errors:
            message = format_error(errors[0])
        else:
            message = "Validation failed"
        logger.warning("[%s] Request rejected: %s", rid, message)
        return _error(400, message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, exc.message)

    @app.exception_handler(TodoMemoError)
    async def handle_app_error(request: Request, exc: TodoMemoError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, GENERIC_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Answered outside the logging middleware, so the id header is set here
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error(500, GENERIC_ERROR_MESSAGE, request_id=rid)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[TodoStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Store to serve from. When omitted, the lifespan handler builds
               the one selected by STORE_BACKEND at startup.

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Todo Memo API",
        description="Ordered todo list with completion tracking, stored in MongoDB.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if store is not None:
        attach_store(app, store)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added runs first)

    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers refuse credentials with a wildcard origin
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(todos.router)
    app.include_router(health.router)

    # Mounted last: "/" would otherwise shadow every route above
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="assets")
        logger.info("Serving static assets from %s", static_dir.resolve())

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn imports `todo_memo.main:app`
app = create_app()


def run() -> None:
    """Entry point of the `todo-memo` console script."""
    uvicorn.run(
        "todo_memo.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
