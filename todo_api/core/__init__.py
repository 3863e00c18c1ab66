# 3 files: exceptions, request context, logging setup
"""Core building blocks shared by the API layer and the store providers."""

from todo_api.core.context import RequestContext
from todo_api.core.exceptions import (
    TodoApiException,
    StoreError,
    StoreTimeoutError,
    ServiceInitializationError,
)

__all__ = [
    "RequestContext",
    "TodoApiException",
    "StoreError",
    "StoreTimeoutError",
    "ServiceInitializationError",
]
