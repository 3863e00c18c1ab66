from abc import ABC, abstractmethod
from typing import Optional

from todo_api.core.context import RequestContext
from todo_api.schemas import TodoItem


class ITodoStore(ABC):
    """
    Abstract base class for all todo store providers.

    Implementations raise StoreError for any backend failure.
    """

    name: str = "base"

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the store provider."""
        pass

    @abstractmethod
    async def get_todo(
        self, ctx: RequestContext, todo_id: int
    ) -> Optional[TodoItem]:
        """Return the item, or None if no record has this id."""
        pass

    @abstractmethod
    async def delete_todo(self, ctx: RequestContext, todo_id: int) -> int:
        """Delete the item and return the number of removed records."""
        pass

    @abstractmethod
    async def post_todo(self, ctx: RequestContext, item: TodoItem) -> int:
        """Insert the item and return its assigned id."""
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """Shutdown store provider and release resources."""
        pass
