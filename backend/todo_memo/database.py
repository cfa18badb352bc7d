"""
Todo Memo Backend — Store Lifecycle & Dependencies
====================================================

What:  Builds the configured TodoStore, opens and closes it with the
       application, and exposes the FastAPI dependency routes use.
How:   The store and the TodoService wrapping it live on `app.state`. They
       are created either by create_app(store=...) (tests) or by the
       lifespan handler via open_store() (server start).
Who:   main.py (lifespan) and the route modules (Depends(get_todo_service)).

Connection bootstrap:
    The Mongo client connects lazily. open_store() starts a background task
    that pings the server, logs success or failure and creates the `order`
    index. Requests are served while that task is still running; if the
    server is unreachable they fail with StoreError (→ 500) instead of
    hanging the startup.
"""

import asyncio
import contextlib
import logging
from typing import Optional

from fastapi import FastAPI, Request

from todo_memo.config import Settings, settings
from todo_memo.exceptions import StoreError
from todo_memo.services.memory_store import InMemoryTodoStore
from todo_memo.services.mongo_store import MongoTodoStore
from todo_memo.services.todo_service import TodoService
from todo_memo.services.todo_store import TodoStore

logger = logging.getLogger(__name__)


def build_store(config: Optional[Settings] = None) -> TodoStore:
    """Instantiate the store selected by STORE_BACKEND."""
    config = config or settings
    if config.store_backend == "memory":
        logger.warning("Using in-memory todo store; data will not survive a restart")
        return InMemoryTodoStore()
    return MongoTodoStore.from_url(
        config.mongo_url,
        db_name=config.mongo_db_name,
        collection_name=config.mongo_collection,
        server_selection_timeout_ms=config.mongo_server_selection_timeout_ms,
    )


def attach_store(app: FastAPI, store: TodoStore) -> None:
    """Make `store` (and a TodoService over it) available to request handlers."""
    app.state.todo_store = store
    app.state.todo_service = TodoService(store)


async def report_connection(store: TodoStore) -> bool:
    """Ping the store, log the outcome and prepare indexes when reachable."""
    if not await store.ping():
        logger.error("Could not connect to the todo store (%s)", type(store).__name__)
        return False
    try:
        await store.ensure_indexes()
    except StoreError as e:
        logger.error("Connected, but index creation failed: %s", e.context)
        return True
    logger.info("Connected to the todo store (%s)", type(store).__name__)
    return True


async def open_store(app: FastAPI) -> Optional[asyncio.Task]:
    """
    Ensure a store is attached and start the connection report.

    Returns:
        The background connection-report task (cancelled by close_store()).
    """
    store: Optional[TodoStore] = getattr(app.state, "todo_store", None)
    if store is None:
        store = build_store()
        attach_store(app, store)
    return asyncio.create_task(report_connection(store))


async def close_store(app: FastAPI, bootstrap: Optional[asyncio.Task] = None) -> None:
    """Stop the connection report if still pending and close the store."""
    if bootstrap is not None and not bootstrap.done():
        bootstrap.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await bootstrap
    store: Optional[TodoStore] = getattr(app.state, "todo_store", None)
    if store is not None:
        await store.close()


def get_todo_service(request: Request) -> TodoService:
    """FastAPI dependency returning the application's TodoService."""
    return request.app.state.todo_service
