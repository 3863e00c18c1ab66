"""
JSON renderer used by the route handlers.

Rendering failures are raised as RenderError so the caller can degrade to a
bare status code instead of leaking a half-written body.
"""

import json
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import Response
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from todo_api.core.exceptions import RenderError

JSON_MEDIA_TYPE = "application/json; charset=utf-8"


class JSONRenderer:
    """Encode models/dicts to JSON responses."""

    def __init__(self, indent: Optional[int] = None) -> None:
        self.indent = indent

    def encode(self, content: Any) -> bytes:
        try:
            if isinstance(content, BaseModel):
                payload = content.model_dump(mode="json")
            else:
                payload = jsonable_encoder(content)

            return json.dumps(
                payload,
                ensure_ascii=False,
                allow_nan=False,
                indent=self.indent,
                separators=None if self.indent else (",", ":"),
            ).encode("utf-8")
        except (TypeError, ValueError, PydanticSerializationError) as e:
            raise RenderError(
                f"failed to encode {type(content).__name__} as JSON: {str(e)}"
            ) from e

    def json(self, status_code: int, content: Any) -> Response:
        return Response(
            content=self.encode(content),
            status_code=status_code,
            media_type=JSON_MEDIA_TYPE,
        )
