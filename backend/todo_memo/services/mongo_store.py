"""
Todo Memo Backend — MongoDB Todo Store
========================================

What:  TodoStore implementation on MongoDB using the async motor driver.
How:   One AsyncIOMotorClient per application, opened by the lifespan handler
       and closed at shutdown. Every driver call is wrapped so that
       PyMongoError surfaces as StoreError (→ HTTP 500).
Who:   Built by database.build_store() when STORE_BACKEND=mongo.

Document shape (collection `todos` in database `todo_memo`):
    {
        "_id":    ObjectId,
        "value":  "Buy milk",
        "order":  3,
        "doneAt": ISODate   # absent while incomplete
    }

Indexes:
    A non-unique ascending index on `order`. It cannot be unique: the swap
    writes the other todo first, so for a moment two documents share a value.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from todo_memo.exceptions import StoreError
from todo_memo.models.todo import Todo
from todo_memo.services.todo_store import TodoStore

logger = logging.getLogger(__name__)


def _to_object_id(todo_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(todo_id)
    except (InvalidId, TypeError):
        return None


def document_to_todo(doc: Mapping[str, Any]) -> Todo:
    """Map a raw Mongo document to the domain entity."""
    return Todo(
        id=str(doc["_id"]),
        value=doc["value"],
        order=int(doc["order"]),
        done_at=doc.get("doneAt"),
    )


class MongoTodoStore(TodoStore):
    """
    Todo persistence on a MongoDB collection.

    Args:
        client: Connected AsyncIOMotorClient (owned by this store; closed on close()).
        db_name: Database name.
        collection_name: Collection holding the todo documents.
    """

    backend_name = "mongo"

    def __init__(
        self,
        client: AsyncIOMotorClient,
        db_name: str = "todo_memo",
        collection_name: str = "todos",
    ):
        self.client = client
        self.collection: AsyncIOMotorCollection = client[db_name][collection_name]

    @classmethod
    def from_url(
        cls,
        url: str,
        db_name: str,
        collection_name: str,
        server_selection_timeout_ms: int = 5000,
    ) -> "MongoTodoStore":
        # tz_aware so doneAt comes back as an aware UTC datetime
        client = AsyncIOMotorClient(
            url,
            tz_aware=True,
            serverSelectionTimeoutMS=server_selection_timeout_ms,
        )
        return cls(client, db_name=db_name, collection_name=collection_name)

    def _fail(self, operation: str, error: Exception) -> StoreError:
        logger.error("MongoDB %s failed: %s", operation, error)
        return StoreError(
            context={"operation": operation, "error_type": type(error).__name__},
        )

    async def insert(self, value: str, order: int) -> Todo:
        doc: Dict[str, Any] = {"value": value, "order": order}
        try:
            result = await self.collection.insert_one(doc)
        except PyMongoError as e:
            raise self._fail("insert", e) from e
        return Todo(id=str(result.inserted_id), value=value, order=order)

    async def find_by_id(self, todo_id: str) -> Optional[Todo]:
        oid = _to_object_id(todo_id)
        if oid is None:
            return None
        try:
            doc = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise self._fail("find_by_id", e) from e
        return document_to_todo(doc) if doc else None

    async def find_by_order(self, order: int) -> Optional[Todo]:
        try:
            doc = await self.collection.find_one({"order": order})
        except PyMongoError as e:
            raise self._fail("find_by_order", e) from e
        return document_to_todo(doc) if doc else None

    async def find_max_order(self) -> Optional[Todo]:
        try:
            doc = await self.collection.find_one({}, sort=[("order", DESCENDING)])
        except PyMongoError as e:
            raise self._fail("find_max_order", e) from e
        return document_to_todo(doc) if doc else None

    async def list_by_order_desc(self) -> List[Todo]:
        try:
            cursor = self.collection.find({}).sort("order", DESCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise self._fail("list", e) from e
        return [document_to_todo(doc) for doc in docs]

    async def save(self, todo: Todo) -> None:
        oid = _to_object_id(todo.id)
        if oid is None:
            return
        update: Dict[str, Any] = {"$set": {"value": todo.value, "order": todo.order}}
        if todo.done_at is None:
            update["$unset"] = {"doneAt": ""}
        else:
            update["$set"]["doneAt"] = todo.done_at
        try:
            await self.collection.update_one({"_id": oid}, update)
        except PyMongoError as e:
            raise self._fail("save", e) from e

    async def delete(self, todo_id: str) -> bool:
        oid = _to_object_id(todo_id)
        if oid is None:
            return False
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            raise self._fail("delete", e) from e
        return result.deleted_count > 0

    async def ping(self) -> bool:
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", e)
            return False
        return True

    async def ensure_indexes(self) -> None:
        try:
            await self.collection.create_index([("order", ASCENDING)], name="order_1")
        except PyMongoError as e:
            raise self._fail("ensure_indexes", e) from e

    async def close(self) -> None:
        self.client.close()
