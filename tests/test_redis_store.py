"""
RedisTodoStore against an in-process fake client (no Redis server needed).
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
import redis.exceptions

from todo_api.config.settings import Settings
from todo_api.core.exceptions import StoreError, StoreTimeoutError
from todo_api.providers.store.redis import RedisTodoStore
from todo_api.schemas import TodoItem


class FakeRedisClient:
    """Subset of redis.asyncio.Redis used by RedisTodoStore, with toggled failures."""

    def __init__(self) -> None:
        self.values: Dict[str, str] = {}
        self.counters: Dict[str, int] = {}
        self.calls: List[str] = []
        self.should_fail = False
        self.should_hang = False
        self.closed = False

    async def _maybe_fail(self, op: str) -> None:
        self.calls.append(op)
        if self.should_hang:
            await asyncio.sleep(5)
        if self.should_fail:
            raise redis.exceptions.ConnectionError("Connection refused")

    async def ping(self) -> bool:
        await self._maybe_fail("PING")
        return True

    async def get(self, key: str) -> Optional[str]:
        await self._maybe_fail("GET")
        return self.values.get(key)

    async def set(self, key: str, value: str) -> bool:
        await self._maybe_fail("SET")
        self.values[key] = value
        return True

    async def delete(self, key: str) -> int:
        await self._maybe_fail("DEL")
        return 1 if self.values.pop(key, None) is not None else 0

    async def incr(self, key: str) -> int:
        await self._maybe_fail("INCR")
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakeRedisClient:
    return FakeRedisClient()


@pytest.fixture
def redis_store(fake_client: FakeRedisClient) -> RedisTodoStore:
    settings = Settings(
        STORE_PROVIDER="redis",
        REDIS_TIMEOUT=0.1,
        REDIS_KEY_PREFIX="test",
    )
    return RedisTodoStore(settings, client=fake_client)


@pytest.mark.asyncio
async def test_initialize_pings(redis_store, fake_client) -> None:
    await redis_store.initialize()

    assert redis_store.initialized is True
    assert fake_client.calls == ["PING"]


@pytest.mark.asyncio
async def test_initialize_failure_raises_store_error(redis_store, fake_client) -> None:
    fake_client.should_fail = True

    with pytest.raises(StoreError):
        await redis_store.initialize()
    assert redis_store.initialized is False


@pytest.mark.asyncio
async def test_post_stores_json_under_prefixed_key(redis_store, fake_client, ctx) -> None:
    created = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    first = await redis_store.post_todo(ctx, TodoItem(todo="buy milk", created_on=created))
    second = await redis_store.post_todo(ctx, TodoItem(todo="walk dog"))

    assert (first, second) == (1, 2)
    assert fake_client.counters == {"test:next_id": 2}
    assert set(fake_client.values) == {"test:item:1", "test:item:2"}

    item = await redis_store.get_todo(ctx, first)
    assert item == TodoItem(todo="buy milk", created_on=created)


@pytest.mark.asyncio
async def test_get_missing_returns_none(redis_store, ctx) -> None:
    assert await redis_store.get_todo(ctx, 99) is None


@pytest.mark.asyncio
async def test_delete_returns_count(redis_store, ctx) -> None:
    todo_id = await redis_store.post_todo(ctx, TodoItem(todo="x"))

    assert await redis_store.delete_todo(ctx, todo_id) == 1
    assert await redis_store.delete_todo(ctx, todo_id) == 0


@pytest.mark.asyncio
async def test_corrupt_record_raises_store_error(redis_store, fake_client, ctx) -> None:
    fake_client.values["test:item:3"] = "not json"

    with pytest.raises(StoreError) as exc_info:
        await redis_store.get_todo(ctx, 3)
    assert exc_info.value.context == {"key": "test:item:3"}


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["get", "delete", "post"])
async def test_connection_errors_become_store_errors(
    redis_store, fake_client, ctx, operation
) -> None:
    fake_client.should_fail = True

    with pytest.raises(StoreError) as exc_info:
        if operation == "get":
            await redis_store.get_todo(ctx, 1)
        elif operation == "delete":
            await redis_store.delete_todo(ctx, 1)
        else:
            await redis_store.post_todo(ctx, TodoItem(todo="x"))
    assert exc_info.value.error_code == "STORE_ERROR"


@pytest.mark.asyncio
async def test_slow_backend_times_out(redis_store, fake_client, ctx) -> None:
    fake_client.should_hang = True

    with pytest.raises(StoreTimeoutError) as exc_info:
        await redis_store.get_todo(ctx, 1)
    assert exc_info.value.error_code == "STORE_TIMEOUT"


@pytest.mark.asyncio
async def test_shutdown_closes_client(redis_store, fake_client) -> None:
    await redis_store.initialize()

    await redis_store.shutdown()

    assert fake_client.closed is True
    assert redis_store.initialized is False
