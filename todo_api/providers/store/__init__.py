"""Todo store provider package."""

from todo_api.providers.store.base import ITodoStore
from todo_api.providers.store.memory import InMemoryTodoStore
from todo_api.providers.store.redis import RedisTodoStore

__all__ = [
    "ITodoStore",
    "InMemoryTodoStore",
    "RedisTodoStore",
]
