"""
Todo Memo Backend — In-Memory Todo Store
==========================================

What:  TodoStore backed by a dict, used by the test suite and by
       STORE_BACKEND=memory for running without MongoDB.
How:   Ids are random 24-character hex strings so they look like the
       ObjectIds the Mongo store hands out. Reads and writes return copies so
       callers cannot mutate stored state behind the store's back.

Thread Safety:
    All methods run on the event loop without awaiting in between, so no
    lock is needed for single-process use.
"""

import uuid
from typing import Dict, List, Optional

from todo_memo.models.todo import Todo
from todo_memo.services.todo_store import TodoStore


class InMemoryTodoStore(TodoStore):
    """Process-local todo store. Data is lost when the process exits."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._items: Dict[str, Todo] = {}

    def _allocate_id(self) -> str:
        return uuid.uuid4().hex[:24]

    async def insert(self, value: str, order: int) -> Todo:
        todo = Todo(id=self._allocate_id(), value=value, order=order)
        self._items[todo.id] = todo
        return todo.copy()

    async def find_by_id(self, todo_id: str) -> Optional[Todo]:
        item = self._items.get(todo_id)
        return None if item is None else item.copy()

    async def find_by_order(self, order: int) -> Optional[Todo]:
        for item in self._items.values():
            if item.order == order:
                return item.copy()
        return None

    async def find_max_order(self) -> Optional[Todo]:
        if not self._items:
            return None
        return max(self._items.values(), key=lambda t: t.order).copy()

    async def list_by_order_desc(self) -> List[Todo]:
        items = sorted(self._items.values(), key=lambda t: t.order, reverse=True)
        return [t.copy() for t in items]

    async def save(self, todo: Todo) -> None:
        # Saving a todo that was deleted in the meantime is a silent no-op,
        # matching an update_one that matches nothing.
        if todo.id in self._items:
            self._items[todo.id] = todo.copy()

    async def delete(self, todo_id: str) -> bool:
        return self._items.pop(todo_id, None) is not None

    def __len__(self) -> int:
        return len(self._items)
