"""
Todo Memo Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── memory_store:     Empty InMemoryTodoStore
    ├── todo_service:     TodoService over memory_store
    ├── mock_collection:  motor collection double (no MongoDB needed)
    ├── mongo_store:      MongoTodoStore wired to mock_collection
    ├── app:              FastAPI app serving memory_store
    └── test_client:      HTTPX AsyncClient for API endpoint testing
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any todo_memo imports
os.environ["STORE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["STATIC_DIR"] = os.path.join(tempfile.gettempdir(), "todo_memo_no_assets")
os.environ["CORS_ORIGINS"] = "*"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from todo_memo.main import create_app
from todo_memo.services.memory_store import InMemoryTodoStore
from todo_memo.services.mongo_store import MongoTodoStore
from todo_memo.services.todo_service import TodoService


# ══════════════════════════════════════════════════════════════════════════
# Store & Service Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_store():
    return InMemoryTodoStore()


@pytest.fixture
def todo_service(memory_store):
    return TodoService(memory_store)


@pytest.fixture
def mock_collection():
    """
    A stand-in for AsyncIOMotorCollection.

    Coroutine methods are AsyncMocks; `find()` is synchronous in motor and
    returns a cursor whose `sort()` chains and whose `to_list()` is awaited.

    Usage:
        mock_collection.find_one.return_value = {"_id": oid, "value": "x", "order": 1}
    """
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.create_index = AsyncMock(return_value="order_1")

    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    collection.find.return_value = cursor
    return collection


@pytest.fixture
def mongo_store(mock_collection):
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    store = MongoTodoStore(client, db_name="todo_memo_test", collection_name="todos")
    store.collection = mock_collection
    return store


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(memory_store):
    return create_app(store=memory_store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to a fresh app backed by memory_store.

    ASGITransport does not run the lifespan, so the injected store is used
    as is and nothing tries to reach MongoDB.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/todos")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
