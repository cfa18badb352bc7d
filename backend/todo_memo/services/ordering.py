"""
Todo Memo Backend — Todo Ordering Engine
==========================================

What:  Owns the `order` field: picks the order of new todos and moves a todo
       to a requested position by swapping with the current holder.
How:   Pure read/compute/write sequences against the TodoStore.

Assign-on-create:
    order = max(existing order) + 1, or 1 when the store is empty.

Reorder-on-update (move T to N):
    holder = todo currently holding N
    if holder exists and is not T:
        holder.order = T.order   → persisted FIRST
    T.order = N                  → persisted by the caller together with
                                   T's other changes

    Only T and the holder change; every other todo keeps its order.
    Moving to an unused N simply leaves a gap.

Consistency:
    Neither sequence is atomic at the database level. `lock` serializes them
    inside one process (callers hold it across the read and the final write);
    several processes writing to the same collection can still race, and a
    failure between the two swap writes leaves both todos on the same order.
"""

import asyncio
import logging
from typing import Optional

from todo_memo.models.todo import Todo
from todo_memo.services.todo_store import TodoStore

logger = logging.getLogger(__name__)


class OrderingEngine:
    """Order-field arithmetic for one store."""

    def __init__(self, store: TodoStore):
        self.store = store
        self.lock = asyncio.Lock()

    async def next_order(self) -> int:
        """Order value for a todo about to be created."""
        top: Optional[Todo] = await self.store.find_max_order()
        return top.order + 1 if top else 1

    async def move_to(self, todo: Todo, new_order: int) -> Optional[Todo]:
        """
        Set `todo.order` to `new_order`, swapping with the current holder.

        The holder (if any) is saved immediately; `todo` itself is only
        mutated in memory and must be saved by the caller.

        Returns:
            The todo that was displaced (with its new order), or None.
        """
        if todo.order == new_order:
            return None

        holder = await self.store.find_by_order(new_order)
        displaced: Optional[Todo] = None
        if holder is not None and holder.id != todo.id:
            holder.order = todo.order
            await self.store.save(holder)
            displaced = holder
            logger.debug(
                "Swapped order: todo %s %d→%d, todo %s %d→%d",
                todo.id, todo.order, new_order, holder.id, new_order, holder.order,
            )

        todo.order = new_order
        return displaced
