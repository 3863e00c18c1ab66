"""
================================================================================
FILE: todo_api/api/dependencies.py
================================================================================

PURPOSE:
FastAPI dependency injection functions. Provides reusable dependencies
that are injected into route handlers via Depends():
- Configuration access
- Container / store access
- JSON renderer
- Request context (request id + child logger)

DEPENDENCY CHAIN:
get_settings()
├─ Used by: health endpoint
get_container()
├─ Used by: get_store, health endpoint
get_store()
├─ Depends on: get_container
├─ Used by: todo endpoints
get_renderer()
├─ Used by: todo endpoints
get_request_context()
├─ Reads request.state.request_id (set by middleware)
├─ Used by: todo endpoints (logging, passed to the store)

KEY FACTS:
- Everything lives on app.state, set up by create_app()
- Errors raised here return 500/503 with the error envelope
- Enable testing by overriding: app.dependency_overrides[get_store] = ...
"""
#================================================================================
#IMPORTS
#================================================================================

import logging

from fastapi import Depends, HTTPException, Request, status

from todo_api.api.render import JSONRenderer
from todo_api.config.settings import Settings
from todo_api.container.service_container import ServiceContainer
from todo_api.core.context import RequestContext
from todo_api.providers.store.base import ITodoStore
from todo_api.utils import generate_request_id

logger = logging.getLogger(__name__)

#================================================================================
#DEPENDENCY FUNCTIONS
#================================================================================

async def get_settings(request: Request) -> Settings:
    """
    Get application settings (configuration).

    Raises:
        HTTPException: If settings not initialized (startup failed)
    """
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        logger.error("Settings not available on app.state")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service initialization failed"
        )
    return settings


async def get_container(request: Request) -> ServiceContainer:
    """
    Get ServiceContainer holding the configured store provider.

    Raises:
        HTTPException: If the container is missing
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        logger.error("Container not available on app.state")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service container not initialized"
        )
    return container


async def get_store(
    container: ServiceContainer = Depends(get_container)
) -> ITodoStore:
    """
    Get the todo store. Routes only see the ITodoStore interface,
    never which backend is active.

    Raises:
        HTTPException: If the store is not initialized
    """
    try:
        return container.get_store()
    except RuntimeError as e:
        logger.error(f"Store not available: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Store not initialized"
        )


async def get_renderer(request: Request) -> JSONRenderer:
    """Get the JSON renderer (a default one if create_app did not set it)."""
    renderer = getattr(request.app.state, "renderer", None)
    return renderer if renderer is not None else JSONRenderer()


async def get_request_context(request: Request) -> RequestContext:
    """
    Build the request context.
    Provides structured context for logging and correlation.

    Returns:
        RequestContext whose logger is bound to the request id set by
        the middleware
    """
    request_id = getattr(request.state, "request_id", None) or generate_request_id()
    return RequestContext.create(request_id)
