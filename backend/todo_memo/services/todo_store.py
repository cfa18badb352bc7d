"""
Todo Memo Backend — Abstract Todo Store Interface
===================================================

What:  The persistence contract the services rely on.
How:   Concrete stores inherit from TodoStore:
       - MongoTodoStore (services/mongo_store.py): MongoDB through motor
       - InMemoryTodoStore (services/memory_store.py): process-local dict
Who:   Created once per application (see database.py) and injected into
       TodoService and OrderingEngine.

Contract:
    - Returned Todo objects are copies; mutating them has no effect until
      they are passed back to `save()`.
    - Lookups by an id the store cannot parse return None (never raise).
    - Driver/connection failures are raised as StoreError.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from todo_memo.models.todo import Todo


class TodoStore(ABC):
    """Abstract document store holding Todo entities."""

    # Reported by GET /health
    backend_name: str = "abstract"

    @abstractmethod
    async def insert(self, value: str, order: int) -> Todo:
        """Create a new todo and return it with its store-assigned id."""
        ...

    @abstractmethod
    async def find_by_id(self, todo_id: str) -> Optional[Todo]:
        """Return the todo with `todo_id`, or None."""
        ...

    @abstractmethod
    async def find_by_order(self, order: int) -> Optional[Todo]:
        """Return a todo currently holding `order`, or None."""
        ...

    @abstractmethod
    async def find_max_order(self) -> Optional[Todo]:
        """Return the todo with the highest order, or None when empty."""
        ...

    @abstractmethod
    async def list_by_order_desc(self) -> List[Todo]:
        """Return every todo sorted by order, highest first."""
        ...

    @abstractmethod
    async def save(self, todo: Todo) -> None:
        """
        Persist `value`, `order` and `done_at` of an existing todo.

        A `done_at` of None removes the completion timestamp.
        """
        ...

    @abstractmethod
    async def delete(self, todo_id: str) -> bool:
        """Hard-delete a todo. Returns False if it did not exist."""
        ...

    async def ping(self) -> bool:
        """Check that the backend is reachable."""
        return True

    async def ensure_indexes(self) -> None:
        """Create any indexes the store needs. No-op by default."""
        return None

    async def close(self) -> None:
        """Release connections held by the store."""
        return None
