# ============================================================================
# Logging setup - structlog rendering for structlog and stdlib records
# ============================================================================

"""
Configures structlog and the root logger once at startup.

- text: human-readable lines (structlog ConsoleRenderer, no colors)
- json: one object per line (structlog JSONRenderer)

Module loggers (logging.getLogger(__name__), uvicorn) and request-scoped
structlog loggers end up on the same stdout handler, rendered by the same
ProcessorFormatter. Fields bound with bind_contextvars (request_id, set by
the request middleware) are merged into both.
"""

import logging
import sys
from typing import List

import structlog
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor

from todo_api.config.settings import Settings

_HANDLER_ATTR = "_todo_api_handler"


def _shared_processors() -> List[Processor]:
    return [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def build_renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def build_formatter(log_format: str) -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering both structlog events and plain LogRecords."""
    final: List[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if log_format == "json":
        final.append(structlog.processors.format_exc_info)
    final.append(build_renderer(log_format))

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*_shared_processors(), structlog.stdlib.ExtraAdder()],
        processors=final,
    )


def configure_logging(settings: Settings) -> logging.Handler:
    """
    Install (or reconfigure) the stdout handler and configure structlog.

    Calling it again replaces the level and formatter of the same handler
    instead of stacking a second one.
    """
    level = getattr(logging, settings.log_level, logging.INFO)
    root_logger = logging.getLogger()

    handler = getattr(root_logger, _HANDLER_ATTR, None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        root_logger.addHandler(handler)
        setattr(root_logger, _HANDLER_ATTR, handler)

    handler.setLevel(level)
    handler.setFormatter(build_formatter(settings.log_format))
    root_logger.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return handler
