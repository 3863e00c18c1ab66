"""
Request-scoped context passed explicitly from route handlers to the store.

Carries the request id and a structlog logger bound to the context fields
(request_id, todo_id, ...).
"""

from dataclasses import dataclass
from typing import Any

import structlog

from todo_api.utils import format_logger_context

REQUEST_LOGGER_NAME = "todo_api.request"


@dataclass(frozen=True)
class RequestContext:
    """Request id plus a logger bound to it."""

    request_id: str
    logger: Any

    @classmethod
    def create(
        cls, request_id: str, logger_name: str = REQUEST_LOGGER_NAME
    ) -> "RequestContext":
        logger = structlog.get_logger(logger_name).bind(
            **format_logger_context(request_id)
        )
        return cls(request_id=request_id, logger=logger)

    def with_fields(self, **fields: Any) -> "RequestContext":
        """Derive a child context whose logger carries extra fields."""
        return RequestContext(
            request_id=self.request_id,
            logger=self.logger.bind(**fields),
        )
