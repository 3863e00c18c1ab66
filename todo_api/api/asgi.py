# ASGI entry point
"""
================================================================================
FILE: todo_api/api/asgi.py
================================================================================

PURPOSE:
    ASGI entry point for production servers (uvicorn, gunicorn with uvicorn
    workers). Builds the application once from environment configuration.

    uvicorn todo_api.api.asgi:app --host 0.0.0.0 --port 8080
"""

from todo_api.api.main import create_app

# ASGI servers look for 'app' by default
__all__ = ["app"]

app = create_app()
