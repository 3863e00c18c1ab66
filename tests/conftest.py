from __future__ import annotations

from typing import Iterator, Optional

import pytest
from fastapi.testclient import TestClient

from todo_api.api.main import create_app
from todo_api.api.render import JSONRenderer
from todo_api.config.settings import Settings
from todo_api.core.context import RequestContext
from todo_api.core.exceptions import RenderError, StoreError
from todo_api.providers.store.base import ITodoStore
from todo_api.providers.store.memory import InMemoryTodoStore
from todo_api.schemas import TodoItem, TodoPostResponse


class FailingTodoStore(ITodoStore):
    """Store whose every operation fails like an unreachable backend."""

    name = "failing"

    async def initialize(self) -> None:
        pass

    async def get_todo(self, ctx: RequestContext, todo_id: int) -> Optional[TodoItem]:
        raise StoreError("connection refused", context={"todo_id": todo_id})

    async def delete_todo(self, ctx: RequestContext, todo_id: int) -> int:
        raise StoreError("connection refused", context={"todo_id": todo_id})

    async def post_todo(self, ctx: RequestContext, item: TodoItem) -> int:
        raise StoreError("connection refused")

    async def shutdown(self) -> None:
        pass


class CrashingTodoStore(FailingTodoStore):
    """Store raising an unexpected (non-store) exception."""

    name = "crashing"

    async def get_todo(self, ctx: RequestContext, todo_id: int) -> Optional[TodoItem]:
        raise RuntimeError("boom")


class BrokenRenderer(JSONRenderer):
    """Renderer that can never encode a body."""

    def encode(self, content):
        raise RenderError("encoder unavailable")


class PostResponseBrokenRenderer(JSONRenderer):
    """Renderer that fails only on the id returned by POST."""

    def encode(self, content):
        if isinstance(content, TodoPostResponse):
            raise RenderError("encoder unavailable")
        return super().encode(content)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        STORE_PROVIDER="memory",
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="text",
        ENVIRONMENT="development",
        DEBUG=False,
    )


@pytest.fixture
def memory_store() -> InMemoryTodoStore:
    return InMemoryTodoStore()


@pytest.fixture
def ctx() -> RequestContext:
    return RequestContext.create("test-request", logger_name="tests")


def _client(settings: Settings, store: ITodoStore) -> Iterator[TestClient]:
    app = create_app(settings=settings, store=store)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def client(settings: Settings, memory_store: InMemoryTodoStore) -> Iterator[TestClient]:
    yield from _client(settings, memory_store)


@pytest.fixture
def failing_client(settings: Settings) -> Iterator[TestClient]:
    yield from _client(settings, FailingTodoStore())


@pytest.fixture
def crashing_client(settings: Settings) -> Iterator[TestClient]:
    yield from _client(settings, CrashingTodoStore())
