"""
Todo Memo Backend — Payload Validation
========================================

What:  Validates raw JSON payloads against named schemas before any business
       logic or persistence runs.
How:   Each schema name maps to a Pydantic model. Pydantic's error list is
       reduced to the first error and rendered as a short sentence, e.g.
       `"value" length must be less than or equal to 50 characters long`.
Who:   Called by TodoService at the start of create and update.

Registered schemas:
    create-todo  → CreateTodoRequest  {value: string 1..50}
    update-todo  → UpdateTodoRequest  {order?: int >= 1, done?: bool, value?: string 1..50}
"""

from typing import Any, Dict, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from todo_memo.exceptions import ValidationError
from todo_memo.schemas.todo import CreateTodoRequest, UpdateTodoRequest

CREATE_TODO = "create-todo"
UPDATE_TODO = "update-todo"

SCHEMAS: Dict[str, Type[BaseModel]] = {
    CREATE_TODO: CreateTodoRequest,
    UPDATE_TODO: UpdateTodoRequest,
}


def _field_label(loc: tuple) -> str:
    parts = [str(p) for p in loc if not isinstance(p, int)]
    return ".".join(parts) if parts else "body"


def format_error(error: Dict[str, Any]) -> str:
    """Render one Pydantic error dict as a human-readable message."""
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    label = f'"{_field_label(error.get("loc", ()))}"'

    if kind in {"model_type", "model_attributes_type", "dict_type"}:
        return "Request body must be a JSON object"
    if kind == "missing":
        return f"{label} is required"
    if kind == "extra_forbidden":
        return f"{label} is not allowed"
    if kind == "string_type":
        return f"{label} must be a string"
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{label} is not allowed to be empty"
        return f"{label} length must be at least {ctx.get('min_length')} characters long"
    if kind == "string_too_long":
        return (
            f"{label} length must be less than or equal to "
            f"{ctx.get('max_length')} characters long"
        )
    if kind in {"int_type", "int_parsing", "int_from_float"}:
        return f"{label} must be an integer"
    if kind == "greater_than_equal":
        return f"{label} must be greater than or equal to {ctx.get('ge')}"
    if kind in {"bool_type", "bool_parsing"}:
        return f"{label} must be a boolean"
    return f"{label} is invalid"


def validate_payload(schema_name: str, payload: Any) -> BaseModel:
    """
    Validate `payload` against the schema registered as `schema_name`.

    Returns:
        The validated Pydantic model instance.

    Raises:
        KeyError: `schema_name` is not registered (programming error).
        ValidationError: The payload does not match the schema.
    """
    model = SCHEMAS[schema_name]
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        errors = e.errors()
        first = errors[0] if errors else {}
        raise ValidationError(
            message=format_error(first),
            field=_field_label(first.get("loc", ())) if first else None,
            context={"schema": schema_name, "error_count": len(errors)},
        ) from e
