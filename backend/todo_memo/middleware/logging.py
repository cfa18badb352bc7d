"""
Todo Memo Backend — Request Logging Middleware
================================================

What:  Records one access-log line per HTTP request and tags the request
       with a short correlation id.
How:   Accepts the client's X-Request-ID header or generates one, stores it
       in a ContextVar (read by the exception handlers), times the request
       and logs method, path, status and duration. The timestamp comes from
       the log formatter configured in main.setup_logging().
Who:   Registered on every request by create_app().

Example line:
    2024-01-15T12:00:00 [INFO] todo_memo.access: PATCH /api/todos/65a1... 200 3.4ms [a1b2c3d4]

Request bodies are never logged.
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("todo_memo.access")

# Coroutine-local: concurrent requests on the same thread each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Probe traffic, not worth an access line
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request and echoes its id in the X-Request-ID response header.

    Log level follows the status code: 5xx → ERROR, 4xx → WARNING, else INFO.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception:
            # The catch-all handler answers 500 outside this middleware
            self._log(method, path, 500, start_time, rid)
            raise

        response.headers["X-Request-ID"] = rid

        if path not in QUIET_PATHS:
            self._log(method, path, response.status_code, start_time, rid)

        return response

    @staticmethod
    def _log(method: str, path: str, status: int, start_time: float, rid: str) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s]",
            method,
            path,
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
