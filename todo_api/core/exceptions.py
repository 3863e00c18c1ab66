# MERGED: 2 sections with separation comments
#│   │   ├── SECTION 1: Base exceptions
#│   │   └── SECTION 2: Store & service exceptions
"""
================================================================================
FILE: todo_api/core/exceptions.py
================================================================================

PURPOSE:
    Custom exception hierarchy for the todo API. Store backends raise these,
    route handlers catch them and map them to HTTP status codes.

EXCEPTION CATEGORIES:
    - RECOVERABLE (transient, request may succeed later):
        * StoreError: backend read/write failure
        * StoreTimeoutError: backend operation exceeded its timeout

    - FATAL (won't fix on retry):
        * ValidationError: invalid input data
        * RenderError: response body could not be encoded
        * ServiceInitializationError: store failed to initialize

KEY FACTS:
    - NO imports from todo_api modules (prevents circular dependencies)
    - Every exception carries an error_code for categorization
    - Nothing is retried; each request fails independently
"""

# ================================================================================
# IMPORTS
# ================================================================================

from typing import Optional, Dict, Any

# ================================================================================
# SECTION 1: BASE EXCEPTIONS
# ================================================================================

class TodoApiException(Exception):
    """
    Root exception for all todo API errors.

    Attributes:
        message (str): Human-readable error message
        error_code (str): Machine-readable error code for categorization
        context (dict): Additional context (optional)
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dict for structured logging"""
        return {
            "error": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context
        }


class RecoverableException(TodoApiException):
    """Transient failure (connection reset, timeout)."""
    pass


class FatalException(TodoApiException):
    """Permanent failure (bad input, bad configuration)."""
    pass

# ================================================================================
# SECTION 2: STORE & SERVICE EXCEPTIONS
# ================================================================================

class StoreError(RecoverableException):
    """Store backend operation failure"""

    def __init__(
        self,
        message: str,
        context: Optional[Dict] = None,
        error_code: str = "STORE_ERROR",
    ):
        super().__init__(message, error_code=error_code, context=context)


class StoreTimeoutError(StoreError):
    """Store backend operation exceeded timeout"""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, context=context, error_code="STORE_TIMEOUT")


class ValidationError(FatalException):
    """Request validation failed (won't fix on retry)"""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="VALIDATION_ERROR", context=context)


class RenderError(FatalException):
    """Response body could not be encoded as JSON"""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="RENDER_ERROR", context=context)


class ServiceInitializationError(FatalException):
    """Raised when a service/provider fails to initialize (fatal)."""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="SERVICE_INIT_ERROR", context=context)
