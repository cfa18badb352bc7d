"""
Todo Memo Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract for /api/todos.
How:   Request models are applied by the validation component (not directly
       by FastAPI) so that shape errors become 400 `{errorMessage}` responses.
       Response models use camelCase aliases (`todoId`, `doneAt`) to match
       the JSON the frontend reads.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from todo_memo.models.todo import Todo

VALUE_MIN_LENGTH = 1
VALUE_MAX_LENGTH = 50


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class CreateTodoRequest(BaseModel):
    """Body of POST /api/todos. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    value: StrictStr = Field(
        min_length=VALUE_MIN_LENGTH,
        max_length=VALUE_MAX_LENGTH,
        description="Task description (1-50 characters)",
    )


class UpdateTodoRequest(BaseModel):
    """
    Body of PATCH /api/todos/{id}.

    Every field is optional; `model_fields_set` tells the service which keys
    the client actually sent. `done: null` is accepted and clears completion.
    """

    order: Optional[StrictInt] = Field(default=None, ge=1, description="New position")
    done: Optional[bool] = Field(default=None, description="Mark complete/incomplete")
    value: Optional[StrictStr] = Field(
        default=None,
        min_length=VALUE_MIN_LENGTH,
        max_length=VALUE_MAX_LENGTH,
        description="Replacement task description (1-50 characters)",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class TodoResponse(BaseModel):
    """Serialized todo. `id` and `todoId` carry the same value."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Store-assigned identifier")
    todo_id: str = Field(alias="todoId", description="Same as id")
    value: str = Field(description="Task description")
    order: int = Field(description="Position; higher is listed first")
    done_at: Optional[datetime] = Field(
        default=None,
        alias="doneAt",
        description="Completion time (UTC ISO 8601), null while incomplete",
    )

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoResponse":
        return cls(
            id=todo.id,
            todo_id=todo.id,
            value=todo.value,
            order=todo.order,
            done_at=todo.done_at,
        )


class CreateTodoResponse(BaseModel):
    """Returned by POST /api/todos with HTTP 201."""

    todo: TodoResponse


class TodoListResponse(BaseModel):
    """Returned by GET /api/todos, sorted by order descending."""

    todos: List[TodoResponse]


class MessageResponse(BaseModel):
    """Returned by the GET /api greeting endpoint."""

    message: str


class ErrorResponse(BaseModel):
    """
    Error body for every failed request.

    Example:
        {"errorMessage": "\\"value\\" is required"}
    """

    model_config = ConfigDict(populate_by_name=True)

    error_message: str = Field(alias="errorMessage")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""

    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Store backend in use: mongo or memory")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
