"""
Todo Memo Backend — Health Check Route
========================================

What:  Health check endpoint for container and load balancer probes.
How:   Pings the attached store and reports the aggregate status.
Who:   Docker health checks and monitoring systems.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503)

Requests to /health are not written to the access log.
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from todo_memo import __version__
from todo_memo.config import settings
from todo_memo.schemas.todo import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Service start time for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """Ping the todo store and report whether the service can handle traffic."""
    store = getattr(request.app.state, "todo_store", None)

    connected = store is not None and await store.ping()
    if not connected:
        logger.warning("Health check: todo store unreachable")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        store=store.backend_name if store is not None else settings.store_backend,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )