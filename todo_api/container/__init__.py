"""Dependency injection container."""

from todo_api.container.service_container import ServiceContainer

__all__ = ["ServiceContainer"]
