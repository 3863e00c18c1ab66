"""Liveness endpoint."""

from fastapi import APIRouter, Depends

from todo_api import __version__
from todo_api.api.dependencies import get_container, get_settings
from todo_api.config.settings import Settings
from todo_api.container.service_container import ServiceContainer
from todo_api.schemas import HealthCheckResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse, summary="Health check")
async def health(
    settings: Settings = Depends(get_settings),
    container: ServiceContainer = Depends(get_container),
) -> HealthCheckResponse:
    return HealthCheckResponse(
        status="ok",
        store=container.store_name,
        store_initialized=container.store_initialized,
        environment=settings.environment,
        version=__version__,
    )
