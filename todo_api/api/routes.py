# todo_api/api/routes.py

"""
Todo endpoints.

    GET    /todo/{id}  → 200 TodoItem | 204 not found | 400 bad id / lookup error
    DELETE /todo/{id}  → 200 deleted | 204 nothing deleted | 400 bad id | 500
    POST   /todo       → 200 {"id": n} | 400 bad body | 500

Errors use the envelope {"message": "..."}. If an error body itself cannot
be rendered the response degrades to a bare 500.

Path ids and bodies are validated here rather than through FastAPI's
declarative validation, which would answer 422.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError as PydanticValidationError

from todo_api.api.dependencies import get_renderer, get_request_context, get_store
from todo_api.api.render import JSONRenderer
from todo_api.core.context import RequestContext
from todo_api.core.exceptions import RenderError, StoreError, ValidationError
from todo_api.providers.store.base import ITodoStore
from todo_api.schemas import (
    ErrorResponse,
    TodoItem,
    TodoPostRequest,
    TodoPostResponse,
)
from todo_api.utils import parse_todo_id

router = APIRouter(tags=["todo"])

INVALID_BODY_MESSAGE = "invalid body"
RETRIEVE_ERROR_MESSAGE = "Error retrieving record"
INTERNAL_ERROR_MESSAGE = "Internal server error with request"

_ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    500: {"model": ErrorResponse, "description": "Internal error"},
}


# ============================================================================
# HELPERS
# ============================================================================

def write_error_response(
    ctx: RequestContext,
    renderer: JSONRenderer,
    status_code: int,
    message: str,
) -> Response:
    """Render the error envelope, or a bare 500 if that fails."""
    try:
        return renderer.json(status_code, ErrorResponse(message=message))
    except RenderError as e:
        ctx.logger.error(
            "failed to marshal json error response",
            error=e.message,
            error_code=e.error_code,
            exc_info=True,
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _validate_todo_id(raw: str) -> int:
    try:
        return parse_todo_id(raw)
    except ValueError as e:
        raise ValidationError(str(e), context={"id": raw}) from e


def _format_validation_error(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(p) for p in item.get("loc", ())) or "body"
        message = item.get("msg", "invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        parts.append(f"{field}: {message}")
    return "; ".join(parts)


async def _read_json_object(request: Request) -> Dict[str, Any]:
    """
    Read the request body as a JSON object.

    Raises:
        ValueError: If the body is empty, not decodable JSON (including
            nesting too deep for the decoder), or not an object
    """
    body = await request.body()
    if not body:
        raise ValueError("invalid body in request")

    try:
        payload = json.loads(body)
    except RecursionError as e:
        raise ValueError("JSON body nested too deeply") from e
    if not isinstance(payload, dict):
        raise ValueError(f"expected JSON object, got {type(payload).__name__}")
    return payload


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get(
    "/todo/{todo_id:path}",
    summary="Get a todo item",
    response_model=TodoItem,
    responses={204: {"description": "No todo item with this id"}, **_ERROR_RESPONSES},
)
async def get_todo(
    todo_id: str,
    store: ITodoStore = Depends(get_store),
    renderer: JSONRenderer = Depends(get_renderer),
    ctx: RequestContext = Depends(get_request_context),
) -> Response:
    try:
        parsed_id = _validate_todo_id(todo_id)
    except ValidationError as e:
        ctx.logger.debug("invalid id in request", raw_id=todo_id, error=e.message)
        return write_error_response(ctx, renderer, status.HTTP_400_BAD_REQUEST, e.message)

    todo_ctx = ctx.with_fields(todo_id=parsed_id)
    log = todo_ctx.logger

    try:
        item = await store.get_todo(todo_ctx, parsed_id)
    except StoreError as e:
        log.error(
            "failed to get todo item",
            error=e.message,
            error_code=e.error_code,
            exc_info=True,
        )
        return write_error_response(
            todo_ctx, renderer, status.HTTP_400_BAD_REQUEST, RETRIEVE_ERROR_MESSAGE
        )

    if item is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    try:
        return renderer.json(status.HTTP_200_OK, item)
    except RenderError as e:
        log.error(
            "failed to marshal json todo get response",
            error=e.message,
            exc_info=True,
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.delete(
    "/todo/{todo_id:path}",
    summary="Delete a todo item",
    responses={
        200: {"description": "Todo item deleted"},
        204: {"description": "Nothing deleted"},
        **_ERROR_RESPONSES,
    },
)
async def delete_todo(
    todo_id: str,
    store: ITodoStore = Depends(get_store),
    renderer: JSONRenderer = Depends(get_renderer),
    ctx: RequestContext = Depends(get_request_context),
) -> Response:
    try:
        parsed_id = _validate_todo_id(todo_id)
    except ValidationError as e:
        ctx.logger.debug("invalid id in request", raw_id=todo_id, error=e.message)
        return write_error_response(ctx, renderer, status.HTTP_400_BAD_REQUEST, e.message)

    todo_ctx = ctx.with_fields(todo_id=parsed_id)
    log = todo_ctx.logger

    try:
        count = await store.delete_todo(todo_ctx, parsed_id)
    except StoreError as e:
        log.error(
            "failed to delete todo",
            error=e.message,
            error_code=e.error_code,
            exc_info=True,
        )
        return write_error_response(
            todo_ctx, renderer, status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
        )

    if count == 0:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    log.debug("todo deleted", removed=count)
    return Response(status_code=status.HTTP_200_OK)


@router.post(
    "/todo",
    summary="Create a todo item",
    response_model=TodoPostResponse,
    responses=_ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": TodoPostRequest.model_json_schema(),
                }
            },
        }
    },
)
async def post_todo(
    request: Request,
    store: ITodoStore = Depends(get_store),
    renderer: JSONRenderer = Depends(get_renderer),
    ctx: RequestContext = Depends(get_request_context),
) -> Response:
    log = ctx.logger

    try:
        payload = await _read_json_object(request)
    except ValueError as e:
        log.debug("failed to decode todo body", error=str(e))
        return write_error_response(ctx, renderer, status.HTTP_400_BAD_REQUEST, INVALID_BODY_MESSAGE)

    try:
        todo_request = TodoPostRequest.model_validate(payload)
    except PydanticValidationError as e:
        message = _format_validation_error(e)
        log.debug("invalid post", error=message)
        return write_error_response(ctx, renderer, status.HTTP_400_BAD_REQUEST, message)

    item = TodoItem(todo=todo_request.todo, created_on=datetime.now(timezone.utc))

    try:
        todo_id = await store.post_todo(ctx, item)
    except StoreError as e:
        log.error(
            "failed to insert todo record",
            error=e.message,
            error_code=e.error_code,
            exc_info=True,
        )
        return write_error_response(
            ctx, renderer, status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
        )

    try:
        return renderer.json(status.HTTP_200_OK, TodoPostResponse(id=todo_id))
    except RenderError as e:
        ctx.with_fields(todo_id=todo_id).logger.error(
            "failed to marshal json response",
            error=e.message,
            exc_info=True,
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
