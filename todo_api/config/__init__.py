"""Configuration package."""

from todo_api.config.settings import Settings

__all__ = ["Settings"]
