"""
FILE: todo_api/providers/store/redis.py

Redis todo store provider.

KEY LAYOUT:
    - {prefix}:next_id        INCR counter, ids start at 1, never reused
    - {prefix}:item:{id}      TodoItem as JSON string

All operations are bounded by settings.redis_timeout; timeouts and Redis
errors are raised as StoreError so route handlers can map them.
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional

import redis.asyncio as redis
from pydantic import ValidationError as PydanticValidationError

from todo_api.config.settings import Settings
from todo_api.core.context import RequestContext
from todo_api.core.exceptions import StoreError, StoreTimeoutError
from todo_api.providers.store.base import ITodoStore
from todo_api.schemas import TodoItem

logger = logging.getLogger(__name__)


class RedisTodoStore(ITodoStore):
    """Redis store provider implementation."""

    name = "redis"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[Any] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.prefix = self.settings.redis_key_prefix
        self.timeout = self.settings.redis_timeout
        self.pool: Optional[redis.ConnectionPool] = None
        self.client = client
        self.initialized = False

    def _item_key(self, todo_id: int) -> str:
        return f"{self.prefix}:item:{todo_id}"

    @property
    def _counter_key(self) -> str:
        return f"{self.prefix}:next_id"

    async def initialize(self) -> None:
        """Create the connection pool and verify it with PING."""
        if self.client is None:
            self.pool = redis.ConnectionPool.from_url(
                self.settings.resolved_redis_url,
                max_connections=self.settings.redis_pool_size,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            self.client = redis.Redis(connection_pool=self.pool)

        await self._call(self.client.ping(), "PING")
        self.initialized = True
        logger.info("✓ RedisTodoStore initialized (Redis connected)")

    async def _call(self, awaitable: Awaitable[Any], operation: str, **context: Any) -> Any:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError:
            raise StoreTimeoutError(
                f"Redis {operation} timeout after {self.timeout}s",
                context=context,
            )
        except redis.RedisError as e:
            raise StoreError(
                f"Redis {operation} failed: {str(e)}",
                context=context,
            ) from e

    async def get_todo(
        self, ctx: RequestContext, todo_id: int
    ) -> Optional[TodoItem]:
        key = self._item_key(todo_id)
        raw = await self._call(self.client.get(key), "GET", key=key)
        if raw is None:
            ctx.logger.debug("redis miss", key=key)
            return None

        try:
            return TodoItem.model_validate_json(raw)
        except PydanticValidationError as e:
            raise StoreError(
                f"Corrupt todo record at {key}: {str(e)}",
                context={"key": key},
            ) from e

    async def delete_todo(self, ctx: RequestContext, todo_id: int) -> int:
        key = self._item_key(todo_id)
        count = await self._call(self.client.delete(key), "DEL", key=key)
        ctx.logger.debug("redis del", key=key, removed=count)
        return int(count)

    async def post_todo(self, ctx: RequestContext, item: TodoItem) -> int:
        todo_id = int(
            await self._call(self.client.incr(self._counter_key), "INCR")
        )
        key = self._item_key(todo_id)
        await self._call(
            self.client.set(key, item.model_dump_json()), "SET", key=key
        )
        ctx.logger.debug("redis set", key=key)
        return todo_id

    async def shutdown(self) -> None:
        """Close the Redis client and its pool."""
        try:
            if self.client is not None:
                await self.client.aclose()
            if self.pool is not None:
                await self.pool.disconnect()
        except redis.RedisError as e:
            logger.warning(f"Error shutting down RedisTodoStore: {str(e)}")
        finally:
            self.initialized = False
            logger.info("RedisTodoStore shutdown")


def create_provider(settings: Settings) -> RedisTodoStore:
    return RedisTodoStore(settings)
