"""
Todo Memo Backend — Todo Route Handlers
=========================================

What:  The /api/todos CRUD endpoints and the /api greeting.
How:   Bodies are taken as raw JSON and handed to TodoService, which runs
       them through the validation component. Failures are raised as
       exceptions and turned into `{"errorMessage": ...}` by the handlers in
       main.py, so no handler here catches anything.
Who:   Called by the single-page frontend served from STATIC_DIR.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from todo_memo.database import get_todo_service
from todo_memo.schemas.todo import (
    CreateTodoResponse,
    ErrorResponse,
    MessageResponse,
    TodoListResponse,
    TodoResponse,
)
from todo_memo.services.todo_service import TodoService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Todos"])

_ERRORS = {
    400: {"description": "Invalid request body", "model": ErrorResponse},
    500: {"description": "Store error", "model": ErrorResponse},
}


@router.get("", response_model=MessageResponse, include_in_schema=False)
@router.get("/", response_model=MessageResponse, summary="API greeting")
async def greeting() -> MessageResponse:
    return MessageResponse(message="Hi!")


@router.post(
    "/todos",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateTodoResponse,
    responses=_ERRORS,
    summary="Create a todo",
    description=(
        "Creates a todo from `{\"value\": \"...\"}` (1-50 characters) and places it "
        "at the top of the list (highest order)."
    ),
)
async def create_todo(
    payload: Any = Body(default=None),
    service: TodoService = Depends(get_todo_service),
) -> CreateTodoResponse:
    todo = await service.create_todo(payload)
    return CreateTodoResponse(todo=TodoResponse.from_todo(todo))


@router.get(
    "/todos",
    response_model=TodoListResponse,
    responses={500: _ERRORS[500]},
    summary="List todos",
    description="Returns every todo, highest order first.",
)
async def list_todos(
    service: TodoService = Depends(get_todo_service),
) -> TodoListResponse:
    todos = await service.list_todos()
    return TodoListResponse(todos=[TodoResponse.from_todo(t) for t in todos])


@router.patch(
    "/todos/{todo_id}",
    responses={
        **_ERRORS,
        404: {"description": "Todo not found", "model": ErrorResponse},
    },
    summary="Update a todo",
    description=(
        "Partial update. `order` swaps positions with the todo currently holding "
        "that order, `done` stamps or clears the completion time, `value` replaces "
        "the text. Responds with an empty object."
    ),
)
async def update_todo(
    todo_id: str,
    payload: Any = Body(default=None),
    service: TodoService = Depends(get_todo_service),
) -> Dict[str, Any]:
    await service.update_todo(todo_id, payload)
    return {}


@router.delete(
    "/todos/{todo_id}",
    responses={
        404: {"description": "Todo not found", "model": ErrorResponse},
        500: _ERRORS[500],
    },
    summary="Delete a todo",
)
async def delete_todo(
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
) -> Dict[str, Any]:
    await service.delete_todo(todo_id)
    return {}
