# MERGED: 3 sections with separation comments
#│   │   ├── SECTION 1: Domain schemas (TodoItem)
#│   │   ├── SECTION 2: Request/response schemas
#│   │   └── SECTION 3: Error & health schemas
"""
================================================================================
FILE: todo_api/schemas.py
================================================================================

PURPOSE:
    Pydantic data models for the todo resource, request/response bodies and
    the uniform error envelope. Single source of truth for all data
    structures shared by the API layer and the store providers.

VALIDATION RULES:
    - TodoPostRequest.todo: required string, not empty or whitespace only
    - TodoPostResponse.id: positive integer assigned by the store
    - ErrorResponse.message: always present on non-2xx error bodies

KEY FACTS:
    - TodoItem.created_on is timezone-aware UTC, serialized as ISO-8601
    - Unknown fields on TodoPostRequest are ignored
"""

# ================================================================================
# IMPORTS
# ================================================================================

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

# ================================================================================
# SECTION 1: DOMAIN SCHEMAS
# ================================================================================

class TodoItem(BaseModel):
    """A text note with its creation timestamp. Owned by the store."""

    todo: str
    created_on: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "todo": "buy milk",
                "created_on": "2025-12-10T21:00:00Z",
            }
        }
    )

# ================================================================================
# SECTION 2: REQUEST / RESPONSE SCHEMAS
# ================================================================================

class TodoPostRequest(BaseModel):
    """Body of POST /todo."""

    todo: StrictStr = Field(..., description="Todo text")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"todo": "buy milk"}},
    )

    @field_validator("todo")
    @classmethod
    def _validate_todo(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("todo cannot be blank")
        return v


class TodoPostResponse(BaseModel):
    """Identifier assigned by the store."""

    id: int = Field(..., ge=1)

# ================================================================================
# SECTION 3: ERROR & HEALTH SCHEMAS
# ================================================================================

class ErrorResponse(BaseModel):
    """Uniform error envelope."""

    message: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"message": "id must be an integer"}}
    )


class HealthCheckResponse(BaseModel):
    """Response for GET /health."""

    status: str
    store: str
    store_initialized: bool
    environment: str
    version: Optional[str] = None
