"""
Todo Memo Backend — MongoDB Store Unit Tests
==============================================

What:  Tests for MongoTodoStore's document mapping and driver calls.
How:   The motor collection is replaced by the mock_collection fixture, so
       no MongoDB server is needed.

What we test:
    ✅ Documents map to Todo (doneAt optional)
    ✅ Malformed ids are "not found" without touching the driver
    ✅ save() sets or unsets doneAt
    ✅ Sorting and index creation use the `order` field
    ✅ PyMongoError is wrapped into StoreError
    ✅ ping() reports reachability instead of raising
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from todo_memo.exceptions import StoreError
from todo_memo.models.todo import Todo
from todo_memo.services.mongo_store import MongoTodoStore, document_to_todo


class TestDocumentMapping:
    """Tests for document_to_todo()."""

    def test_incomplete_todo(self):
        oid = ObjectId()
        todo = document_to_todo({"_id": oid, "value": "Buy milk", "order": 4})
        assert todo == Todo(id=str(oid), value="Buy milk", order=4, done_at=None)

    def test_completed_todo(self):
        done_at = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        todo = document_to_todo(
            {"_id": ObjectId(), "value": "x", "order": 1, "doneAt": done_at}
        )
        assert todo.done_at == done_at
        assert todo.is_done


class TestMongoTodoStore:
    """Tests for the driver calls issued by MongoTodoStore."""

    @pytest.mark.asyncio
    async def test_insert_returns_assigned_id(self, mongo_store, mock_collection):
        oid = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=oid)

        todo = await mongo_store.insert("Buy milk", 3)

        mock_collection.insert_one.assert_awaited_once_with({"value": "Buy milk", "order": 3})
        assert todo.id == str(oid)
        assert todo.order == 3
        assert todo.done_at is None

    @pytest.mark.asyncio
    async def test_find_by_id(self, mongo_store, mock_collection):
        oid = ObjectId()
        mock_collection.find_one.return_value = {"_id": oid, "value": "a", "order": 1}

        todo = await mongo_store.find_by_id(str(oid))

        mock_collection.find_one.assert_awaited_once_with({"_id": oid})
        assert todo.id == str(oid)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["not-an-object-id", "123", ""])
    async def test_malformed_id_is_not_found(self, mongo_store, mock_collection, bad_id):
        assert await mongo_store.find_by_id(bad_id) is None
        assert await mongo_store.delete(bad_id) is False
        mock_collection.find_one.assert_not_awaited()
        mock_collection.delete_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_find_max_order_sorts_desc(self, mongo_store, mock_collection):
        assert await mongo_store.find_max_order() is None
        mock_collection.find_one.assert_awaited_once_with({}, sort=[("order", DESCENDING)])

    @pytest.mark.asyncio
    async def test_list_by_order_desc(self, mongo_store, mock_collection):
        docs = [
            {"_id": ObjectId(), "value": "b", "order": 2},
            {"_id": ObjectId(), "value": "a", "order": 1},
        ]
        cursor = mock_collection.find.return_value
        cursor.to_list.return_value = docs

        todos = await mongo_store.list_by_order_desc()

        cursor.sort.assert_called_once_with("order", DESCENDING)
        assert [t.value for t in todos] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_save_sets_done_at(self, mongo_store, mock_collection):
        oid = ObjectId()
        done_at = datetime.now(timezone.utc)

        await mongo_store.save(Todo(id=str(oid), value="a", order=2, done_at=done_at))

        mock_collection.update_one.assert_awaited_once_with(
            {"_id": oid},
            {"$set": {"value": "a", "order": 2, "doneAt": done_at}},
        )

    @pytest.mark.asyncio
    async def test_save_unsets_done_at(self, mongo_store, mock_collection):
        oid = ObjectId()

        await mongo_store.save(Todo(id=str(oid), value="a", order=2))

        mock_collection.update_one.assert_awaited_once_with(
            {"_id": oid},
            {"$set": {"value": "a", "order": 2}, "$unset": {"doneAt": ""}},
        )

    @pytest.mark.asyncio
    async def test_delete_reports_deleted_count(self, mongo_store, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=1)
        assert await mongo_store.delete(str(ObjectId())) is True

        mock_collection.delete_one.return_value = MagicMock(deleted_count=0)
        assert await mongo_store.delete(str(ObjectId())) is False

    @pytest.mark.asyncio
    async def test_ensure_indexes_non_unique_order(self, mongo_store, mock_collection):
        await mongo_store.ensure_indexes()
        mock_collection.create_index.assert_awaited_once_with(
            [("order", ASCENDING)], name="order_1"
        )

    @pytest.mark.asyncio
    async def test_driver_error_wrapped(self, mongo_store, mock_collection):
        mock_collection.find_one.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(StoreError) as exc_info:
            await mongo_store.find_by_order(1)

        assert exc_info.value.context["operation"] == "find_by_order"
        assert exc_info.value.context["error_type"] == "ServerSelectionTimeoutError"
        # Driver details stay out of the client-facing message
        assert "no servers" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_ping(self, mongo_store):
        assert await mongo_store.ping() is True
        mongo_store.client.admin.command.side_effect = PyMongoError("down")
        assert await mongo_store.ping() is False

    @pytest.mark.asyncio
    async def test_close_closes_client(self, mongo_store):
        await mongo_store.close()
        mongo_store.client.close.assert_called_once()


class TestFromUrl:
    """Tests for MongoTodoStore.from_url()."""

    def test_client_options(self):
        with patch("todo_memo.services.mongo_store.AsyncIOMotorClient") as mock_client:
            store = MongoTodoStore.from_url(
                "mongodb://db:27017",
                db_name="todo_memo",
                collection_name="todos",
                server_selection_timeout_ms=1500,
            )

        mock_client.assert_called_once_with(
            "mongodb://db:27017", tz_aware=True, serverSelectionTimeoutMS=1500
        )
        assert store.client is mock_client.return_value
        mock_client.return_value.__getitem__.assert_called_once_with("todo_memo")
