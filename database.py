"""
Document store adapter over MongoDB.

Each collection exposes the small contract the routes rely on: equality-filter
finds, insert, partial update by id and delete by id. Records come back with
their `_id` rendered as a string.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import AsyncMongoClient
from pymongo.errors import DuplicateKeyError, OperationFailure
from pymongo.server_api import ServerApi

from config import settings
from exceptions import InvalidIdentifierError

logger = logging.getLogger(__name__)

LOANS = "loans"
USERS = "users"
APPLICATIONS = "applications"


@dataclass
class UpdateOutcome:
    matched_count: int
    modified_count: int
    upserted_id: Optional[str] = None

    def to_response(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "acknowledged": True,
            "matchedCount": self.matched_count,
            "modifiedCount": self.modified_count,
        }
        if self.upserted_id is not None:
            out["upsertedId"] = self.upserted_id
        return out


def parse_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifierError(f"Invalid id: {value!r}") from e


def serialize_document(doc: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    if doc is None:
        return None
    out = dict(doc)
    if isinstance(out.get("_id"), ObjectId):
        out["_id"] = str(out["_id"])
    return out


class DocumentCollection:
    """One MongoDB collection behind the store contract."""

    def __init__(self, collection):
        self._collection = collection

    async def find(self, filter: Optional[dict[str, Any]] = None, limit: int = 0) -> list[dict[str, Any]]:
        cursor = self._collection.find(filter or {}).limit(limit)
        docs = await cursor.to_list(length=None)
        return [serialize_document(d) for d in docs]

    async def find_one(self, filter: dict[str, Any]) -> Optional[dict[str, Any]]:
        return serialize_document(await self._collection.find_one(filter))

    async def find_by_id(self, record_id: str) -> Optional[dict[str, Any]]:
        return await self.find_one({"_id": parse_object_id(record_id)})

    async def insert(self, record: dict[str, Any]) -> str:
        result = await self._collection.insert_one(dict(record))
        return str(result.inserted_id)

    async def insert_if_absent(self, filter: dict[str, Any], record: dict[str, Any]) -> Optional[str]:
        """
        Insert record unless a document matches filter, in one upsert. Returns the
        new id, or None when a matching document already existed.
        """
        on_insert = {k: v for k, v in record.items() if k not in filter}
        try:
            result = await self._collection.update_one(filter, {"$setOnInsert": on_insert}, upsert=True)
        except DuplicateKeyError:
            # lost a race against a concurrent upsert on a unique index
            return None
        return str(result.upserted_id) if result.upserted_id is not None else None

    async def update_one(
        self,
        filter: dict[str, Any],
        fields: dict[str, Any],
        upsert: bool = False,
    ) -> UpdateOutcome:
        result = await self._collection.update_one(filter, {"$set": fields}, upsert=upsert)
        return UpdateOutcome(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=str(result.upserted_id) if result.upserted_id is not None else None,
        )

    async def update_by_id(self, record_id: str, fields: dict[str, Any]) -> UpdateOutcome:
        return await self.update_one({"_id": parse_object_id(record_id)}, fields)

    async def delete_by_id(self, record_id: str) -> int:
        result = await self._collection.delete_one({"_id": parse_object_id(record_id)})
        return result.deleted_count


class DocumentStore:
    def __init__(self, loans, users, applications):
        self.loans = loans
        self.users = users
        self.applications = applications


_client: Optional[AsyncMongoClient] = None
_store: Optional[DocumentStore] = None


def get_store() -> DocumentStore:
    if _store is None:
        raise RuntimeError("Document store is not initialized")
    return _store


async def init_db() -> DocumentStore:
    global _client, _store
    _client = AsyncMongoClient(
        settings.mongodb_uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
    )
    await _client.admin.command("ping")
    db = _client[settings.database_name]
    try:
        await db[USERS].create_index("email", unique=True)
    except OperationFailure as e:
        logger.warning("Could not ensure unique index on users.email", extra={"error": str(e)})
    _store = DocumentStore(
        loans=DocumentCollection(db[LOANS]),
        users=DocumentCollection(db[USERS]),
        applications=DocumentCollection(db[APPLICATIONS]),
    )
    logger.info("Connected to MongoDB", extra={"database": settings.database_name})
    return _store


async def close_db() -> None:
    global _client, _store
    if _client is not None:
        await _client.close()
    _client = None
    _store = None
