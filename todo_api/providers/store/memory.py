"""In-memory todo store (default provider, development and tests)."""

import asyncio
import logging
from itertools import count
from typing import Dict, Optional

from todo_api.config.settings import Settings
from todo_api.core.context import RequestContext
from todo_api.providers.store.base import ITodoStore
from todo_api.schemas import TodoItem

logger = logging.getLogger(__name__)


class InMemoryTodoStore(ITodoStore):
    """Dict-backed store. Ids start at 1 and are never reused."""

    name = "memory"

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings
        self._items: Dict[int, TodoItem] = {}
        self._next_id = count(1)
        self._lock = asyncio.Lock()
        self.initialized = False

    async def initialize(self) -> None:
        self.initialized = True
        logger.info("✓ InMemoryTodoStore initialized")

    async def get_todo(
        self, ctx: RequestContext, todo_id: int
    ) -> Optional[TodoItem]:
        item = self._items.get(todo_id)
        if item is None:
            ctx.logger.debug("todo not found", store=self.name)
            return None
        return item.model_copy()

    async def delete_todo(self, ctx: RequestContext, todo_id: int) -> int:
        async with self._lock:
            removed = self._items.pop(todo_id, None)
        return 0 if removed is None else 1

    async def post_todo(self, ctx: RequestContext, item: TodoItem) -> int:
        async with self._lock:
            todo_id = next(self._next_id)
            self._items[todo_id] = item.model_copy()
        ctx.logger.debug("todo stored", store=self.name, todo_id=todo_id)
        return todo_id

    async def shutdown(self) -> None:
        self._items.clear()
        self.initialized = False
        logger.info("InMemoryTodoStore shutdown")


def create_provider(settings: Settings) -> InMemoryTodoStore:
    return InMemoryTodoStore(settings)
