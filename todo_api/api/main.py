"""
================================================================================
FILE: todo_api/api/main.py
================================================================================

PURPOSE:
    FastAPI application factory and initialization. Creates and configures the
    FastAPI app instance, registers routes, sets up startup/shutdown hooks,
    and initializes the store provider through the ServiceContainer.

WORKFLOW:
    1. Load configuration (Settings, .env)
    2. Configure logging (text or JSON)
    3. Initialize FastAPI app instance, attach settings/container/renderer
    4. Register startup hook: initialize ServiceContainer (store provider)
    5. Register exception handlers (uniform {"message": ...} envelope)
    6. Register request-id middleware
    7. Register routes
    8. Register shutdown hook: close store connections

KEY FACTS:
    - Startup happens ONCE when server starts
    - Error at startup = server fails to start (catches config errors early)
    - Routes unaware of which store backend is active
    - Every response carries X-Request-ID

TESTING ENVIRONMENT:
    - Build the app with an injected store: create_app(store=InMemoryTodoStore())
    - Use TestClient as a context manager so startup/shutdown hooks run
"""


from __future__ import annotations

import logging
import time
from typing import Dict, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from structlog.contextvars import bind_contextvars, clear_contextvars

from todo_api import __version__
from todo_api.api import health, routes
from todo_api.api.render import JSONRenderer
from todo_api.config.settings import Settings
from todo_api.container.service_container import ServiceContainer
from todo_api.core.logging import configure_logging
from todo_api.providers.store.base import ITodoStore
from todo_api.utils import resolve_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _error_envelope(
    request: Request,
    status_code: int,
    message: str,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    headers = dict(headers or {})
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        headers[REQUEST_ID_HEADER] = request_id
    return JSONResponse(
        status_code=status_code,
        content={"message": message},
        headers=headers,
    )


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ITodoStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (loaded from env/.env when omitted)
        store: Store instance to use instead of settings.store_provider

    Returns:
        FastAPI: Configured application instance ready for startup.
    """
    settings = settings or Settings()
    configure_logging(settings)

    app = FastAPI(
        title="Todo API",
        description="REST CRUD API for todo items",
        version=__version__,
        debug=settings.debug,
    )

    app.state.settings = settings
    app.state.container = ServiceContainer(settings, store=store)
    app.state.renderer = JSONRenderer(indent=2 if settings.debug else None)

    # =========================================================================
    # STARTUP HOOK
    # =========================================================================
    @app.on_event("startup")
    async def startup_event():
        """Initialize the store provider through the ServiceContainer."""
        logger.info("APPLICATION STARTUP")
        logger.info(f"Settings loaded: {settings.to_dict()}")

        try:
            await app.state.container.initialize()
        except Exception as e:
            logger.error(f"STARTUP FAILED: {str(e)}", exc_info=True)
            raise RuntimeError(f"Failed to initialize backend: {str(e)}") from e

        logger.info("APPLICATION STARTUP COMPLETE")

    # =========================================================================
    # SHUTDOWN HOOK
    # =========================================================================
    @app.on_event("shutdown")
    async def shutdown_event():
        """Release store connections."""
        logger.info("APPLICATION SHUTDOWN")
        await app.state.container.shutdown()
        logger.info("APPLICATION SHUTDOWN COMPLETE")

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render framework HTTP errors (404, 405, 503...) in the error envelope."""
        return _error_envelope(
            request, exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Framework-level validation failures are client errors (400)."""
        return _error_envelope(request, status.HTTP_400_BAD_REQUEST, "invalid request")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            f"Unexpected error [request_id={request_id}]: {str(exc)}",
            exc_info=True,
        )
        return _error_envelope(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )

    # =========================================================================
    # MIDDLEWARE
    # =========================================================================
    @app.middleware("http")
    async def add_request_id_middleware(request: Request, call_next):
        """Assign a request ID for correlation tracking and log the request."""
        request.state.request_id = resolve_request_id(
            request.headers.get(REQUEST_ID_HEADER)
        )
        clear_contextvars()
        bind_contextvars(request_id=request.state.request_id)
        start_time = time.time()

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        processing_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({processing_time_ms}ms)"
        )
        return response

    # =========================================================================
    # ROUTES
    # =========================================================================
    app.include_router(routes.router)
    app.include_router(health.router)

    return app


def main() -> None:
    """Console entry point: serve the ASGI app with uvicorn."""
    settings = Settings()
    uvicorn.run(
        "todo_api.api.asgi:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
