"""
MongoDB Document Store
======================

Motor-backed store. Documents keep their ``_id`` as an ObjectId in MongoDB
and are exposed to the service layer with a string ``id``.

Version: 0.1.0
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from services.client_evaluation.exceptions import ConflictError, StorageError
from services.client_evaluation.storage.base import Document, DocumentStore
from shared.database.mongodb import MongoDBClient
from shared.logging import get_logger

logger = get_logger(__name__)


class MongoDocumentStore(DocumentStore):
    """MongoDB collection wrapper."""

    @property
    def backend(self) -> str:
        return "mongodb"

    @property
    def _collection(self) -> Any:
        return MongoDBClient.get_database()[self.collection]

    async def insert(self, document: Document) -> Document:
        to_store = {k: v for k, v in document.items() if k != "id"}
        with self._translate_errors("insert"):
            result = await self._collection.insert_one(to_store)

        to_store["_id"] = result.inserted_id
        return _from_mongo(to_store)

    async def find_by_id(self, doc_id: str) -> Document | None:
        object_id = _parse_object_id(doc_id)
        if object_id is None:
            return None

        with self._translate_errors("find_by_id"):
            raw = await self._collection.find_one({"_id": object_id})
        return _from_mongo(raw) if raw else None

    async def find_one(self, filters: dict[str, Any]) -> Document | None:
        with self._translate_errors("find_one"):
            raw = await self._collection.find_one(filters)
        return _from_mongo(raw) if raw else None

    async def find_all(self) -> list[Document]:
        with self._translate_errors("find_all"):
            cursor = self._collection.find({})
            raws = await cursor.to_list(length=None)
        return [_from_mongo(raw) for raw in raws]

    async def replace(
        self,
        doc_id: str,
        document: Document,
        expected_version: int,
    ) -> Document | None:
        object_id = _parse_object_id(doc_id)
        if object_id is None:
            return None

        to_store = {k: v for k, v in document.items() if k != "id"}
        to_store["version"] = expected_version + 1

        # Documents written before versioning have no version field
        version_filter: dict[str, Any] = (
            {"$in": [0, None]} if expected_version == 0 else expected_version
        )

        with self._translate_errors("replace"):
            raw = await self._collection.find_one_and_replace(
                {"_id": object_id, "version": version_filter},
                to_store,
                return_document=ReturnDocument.AFTER,
            )
        return _from_mongo(raw) if raw else None

    async def delete_by_id(self, doc_id: str) -> Document | None:
        object_id = _parse_object_id(doc_id)
        if object_id is None:
            return None

        with self._translate_errors("delete_by_id"):
            raw = await self._collection.find_one_and_delete({"_id": object_id})
        return _from_mongo(raw) if raw else None

    async def health_check(self) -> dict[str, Any]:
        health = await MongoDBClient.health_check()
        health["backend"] = self.backend
        return health

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except DuplicateKeyError as e:
            logger.warning(
                "mongodb_duplicate_key",
                collection=self.collection,
                operation=operation,
                error=str(e),
            )
            raise ConflictError(f"Duplicate key in {self.collection}") from e
        except PyMongoError as e:
            logger.error(
                "storage_error",
                collection=self.collection,
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StorageError(f"Storage failure during {operation}") from e


def _parse_object_id(doc_id: str) -> ObjectId | None:
    try:
        return ObjectId(doc_id)
    except (InvalidId, TypeError):
        return None


def _from_mongo(raw: dict[str, Any]) -> Document:
    document = {k: v for k, v in raw.items() if k != "_id"}
    document["id"] = str(raw["_id"])
    return document
