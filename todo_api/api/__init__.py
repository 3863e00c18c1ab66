# 7 files: HTTP endpoints, dependencies, rendering, app factory
"""
API layer. Exports the todo router and the application factory.

    from todo_api.api import create_app
    app = create_app()
"""

from todo_api.api.main import create_app
from todo_api.api.routes import router

__all__ = ["create_app", "router"]
