"""
Todo Memo Backend — Todo Domain Model
=======================================

What:  The Todo entity as the services and stores see it.
How:   A plain dataclass; each store maps it to and from its own document
       shape (Mongo documents use `_id`, `value`, `order`, `doneAt`).

Field rules:
    - id:      opaque identifier assigned by the store, never changed
    - value:   1..50 characters (enforced by the validation component)
    - order:   positive integer, unique among existing todos, higher = newer
    - done_at: None while incomplete, completion instant (UTC) otherwise
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass
class Todo:
    """A single todo item."""

    id: str
    value: str
    order: int
    done_at: Optional[datetime] = None

    @property
    def is_done(self) -> bool:
        return self.done_at is not None

    def copy(self) -> "Todo":
        return replace(self)

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, order={self.order}, done={self.is_done})>"
