"""
Todo Memo Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the failure kinds a request can hit.
How:   Each exception carries a user-facing message and an optional context
       dict. The handlers registered in main.py translate them into
       `{"errorMessage": ...}` JSON responses with the matching status code.
Who:   Raised by the validation component, the services and the stores.

Exception Hierarchy:
    TodoMemoError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── StoreError        → 500 Internal Server Error (generic message)

Anything that is not a TodoMemoError falls through to the catch-all handler
and is answered with a generic 500.
"""

from typing import Any, Dict, Optional


class TodoMemoError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TodoMemoError):
    """
    Raised when a request payload does not match the declared shape.

    When:    Missing/non-string/empty/over-long `value`, bad `order` or `done`,
             non-object body, blank value on create.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(TodoMemoError):
    """
    Raised when a referenced todo does not exist.

    When:    PATCH/DELETE /api/todos/{id} with an unknown or malformed id.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "todo",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} does not exist"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class StoreError(TodoMemoError):
    """
    Raised when the document store fails unexpectedly.

    When:    Connection lost, server selection timeout, write failure.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the driver error
    is kept in `context` and only logged.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
