# todo_api/__init__.py

"""
Todo REST API package.

This package contains:
- api: FastAPI routes, dependencies and app factory
- config: settings
- container: store provider discovery
- core: exceptions, request context, logging setup
- providers: store backends (memory, redis)
"""

__all__ = ["__version__"]

__version__ = "1.0.0"
