"""
================================================================================
FILE: todo_api/utils.py
================================================================================

PURPOSE:
Shared utility functions used across the backend: request id generation,
structured logging context and todo id parsing.

KEY FACTS:
- No imports from todo_api modules (prevents circular dependencies)
- All functions are pure/stateless
- Request ID enables request tracking/correlation
"""
#================================================================================
#IMPORTS
#================================================================================

import re
import uuid
from typing import Optional, Dict

# ============================================================================
# SECTION 1: COMMON HELPERS
# ============================================================================

_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._\-]{1,128}$")


def generate_request_id() -> str:
    """Generate unique request ID (UUID v4)."""
    return str(uuid.uuid4())


def resolve_request_id(incoming: Optional[str]) -> str:
    """Reuse a client-supplied request ID if it looks sane, else generate one."""
    if incoming and _REQUEST_ID_PATTERN.fullmatch(incoming):
        return incoming
    return generate_request_id()


def format_logger_context(
    request_id: str,
    todo_id: Optional[int] = None,
) -> Dict[str, object]:
    """Format structured logging context."""
    context: Dict[str, object] = {"request_id": request_id}
    if todo_id is not None:
        context["todo_id"] = todo_id
    return context


# ============================================================================
# SECTION 2: TODO ID PARSING
# ============================================================================

_INT_PATTERN = re.compile(r"^[-+]?[0-9]+$")


def parse_todo_id(raw: Optional[str]) -> int:
    """
    Parse a todo id path value.

    Args:
        raw: Path parameter as received (may be empty)

    Returns:
        The id as a positive int

    Raises:
        ValueError: With a client-facing message if the value is missing,
            not integer-formatted or not positive
    """
    if raw is None or raw == "":
        raise ValueError("id cannot be blank")

    if not _INT_PATTERN.fullmatch(raw):
        raise ValueError("id must be an integer")

    todo_id = int(raw)
    if todo_id < 1:
        raise ValueError("id must be a positive integer")
    return todo_id
