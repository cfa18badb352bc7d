"""
Todo Memo Backend — Todo Service (Request Orchestration)
==========================================================

What:  Business logic behind the four /api/todos endpoints.
How:   Composes the validation component, the OrderingEngine and a TodoStore.
       Expected failures are raised as ValidationError / NotFoundError; store
       failures arrive as StoreError. None of them are caught here, they all
       reach the exception handlers registered in main.py.
Who:   One instance per application (see database.py), injected into routes.

Flows:
    create:  validate → blank check → next order → insert
    list:    read all, order desc
    update:  validate → load (404) → order swap → done toggle → value → save
    delete:  load (404) → delete
"""

import logging
from datetime import datetime, timezone
from typing import Any, List

from todo_memo.exceptions import NotFoundError, ValidationError
from todo_memo.models.todo import Todo
from todo_memo.services.ordering import OrderingEngine
from todo_memo.services.todo_store import TodoStore
from todo_memo.services.validation import CREATE_TODO, UPDATE_TODO, validate_payload

logger = logging.getLogger(__name__)

EMPTY_VALUE_MESSAGE = "Todo value must not be empty."
NOT_FOUND_MESSAGE = "The todo does not exist."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TodoService:
    """
    Todo operations on top of a single store.

    Args:
        store: The document store shared by every request.
    """

    def __init__(self, store: TodoStore):
        self.store = store
        self.ordering = OrderingEngine(store)

    async def create_todo(self, payload: Any) -> Todo:
        """
        Validate `payload` and store a new todo at the top of the list.

        Raises:
            ValidationError: Bad payload or blank value (→ 400).
            StoreError: Store failure (→ 500).
        """
        request = validate_payload(CREATE_TODO, payload)
        value = request.value

        # The schema already rejects "", this also rejects whitespace-only values
        if not value.strip():
            raise ValidationError(message=EMPTY_VALUE_MESSAGE, field="value")

        async with self.ordering.lock:
            order = await self.ordering.next_order()
            todo = await self.store.insert(value=value, order=order)

        logger.info("Todo created: %s (order=%d)", todo.id, todo.order)
        return todo

    async def list_todos(self) -> List[Todo]:
        """All todos, highest order first."""
        return await self.store.list_by_order_desc()

    async def _get_existing(self, todo_id: str) -> Todo:
        todo = await self.store.find_by_id(todo_id)
        if todo is None:
            raise NotFoundError(resource="todo", resource_id=todo_id, message=NOT_FOUND_MESSAGE)
        return todo

    async def update_todo(self, todo_id: str, payload: Any) -> Todo:
        """
        Apply a partial update. Each of `order`, `done` and `value` is
        optional and applied in that order when present.

        `done`: true stamps the current time, false or null clears it.
        A request without a body is an update with no fields.

        Raises:
            ValidationError: Bad payload (→ 400).
            NotFoundError: Unknown id (→ 404).
            StoreError: Store failure (→ 500).
        """
        if payload is None:
            payload = {}
        request = validate_payload(UPDATE_TODO, payload)
        sent = request.model_fields_set

        if "value" in sent and request.value is not None and not request.value.strip():
            raise ValidationError(message=EMPTY_VALUE_MESSAGE, field="value")

        async with self.ordering.lock:
            todo = await self._get_existing(todo_id)

            if "order" in sent and request.order is not None:
                await self.ordering.move_to(todo, request.order)

            if "done" in sent:
                todo.done_at = _utcnow() if request.done else None

            if "value" in sent and request.value is not None:
                todo.value = request.value

            await self.store.save(todo)

        logger.info("Todo updated: %s (fields=%s)", todo_id, sorted(sent))
        return todo

    async def delete_todo(self, todo_id: str) -> None:
        """
        Hard-delete a todo.

        Raises:
            NotFoundError: Unknown id (→ 404).
            StoreError: Store failure (→ 500).
        """
        await self._get_existing(todo_id)
        await self.store.delete(todo_id)
        logger.info("Todo deleted: %s", todo_id)
