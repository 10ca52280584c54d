"""
In-Memory Document Store
========================

Dict-backed store for development and testing.

Data is stored in memory and lost on restart. Operations hold an asyncio
lock so the version check and write in ``replace`` happen together.

Version: 0.1.0
"""

import asyncio
import copy
from typing import Any

from bson import ObjectId

from services.client_evaluation.exceptions import ConflictError
from services.client_evaluation.storage.base import Document, DocumentStore
from shared.logging import get_logger

logger = get_logger(__name__)


class MemoryDocumentStore(DocumentStore):
    """In-memory document store."""

    def __init__(self, collection: str, unique_fields: tuple[str, ...] = ()) -> None:
        super().__init__(collection, unique_fields)
        self._documents: dict[str, Document] = {}
        self._lock = asyncio.Lock()

        logger.debug("memory_store_initialized", collection=collection)

    @property
    def backend(self) -> str:
        return "memory"

    async def insert(self, document: Document) -> Document:
        async with self._lock:
            self._check_unique(document)

            doc_id = str(ObjectId())
            stored = copy.deepcopy(document)
            stored["id"] = doc_id
            self._documents[doc_id] = stored

        return copy.deepcopy(stored)

    async def find_by_id(self, doc_id: str) -> Document | None:
        document = self._documents.get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    async def find_one(self, filters: dict[str, Any]) -> Document | None:
        for document in self._documents.values():
            if all(document.get(key) == value for key, value in filters.items()):
                return copy.deepcopy(document)
        return None

    async def find_all(self) -> list[Document]:
        return [copy.deepcopy(d) for d in self._documents.values()]

    async def replace(
        self,
        doc_id: str,
        document: Document,
        expected_version: int,
    ) -> Document | None:
        async with self._lock:
            current = self._documents.get(doc_id)
            if current is None or current.get("version", 0) != expected_version:
                return None

            self._check_unique(document, exclude_id=doc_id)

            stored = copy.deepcopy(document)
            stored["id"] = doc_id
            stored["version"] = expected_version + 1
            self._documents[doc_id] = stored

        return copy.deepcopy(stored)

    async def delete_by_id(self, doc_id: str) -> Document | None:
        async with self._lock:
            return self._documents.pop(doc_id, None)

    async def health_check(self) -> dict[str, Any]:
        return {
            "status": "healthy",
            "backend": self.backend,
            "documents": len(self._documents),
        }

    def _check_unique(self, document: Document, exclude_id: str | None = None) -> None:
        for field in self.unique_fields:
            value = document.get(field)
            if value is None:
                continue
            for doc_id, existing in self._documents.items():
                if doc_id != exclude_id and existing.get(field) == value:
                    raise ConflictError(
                        f"Duplicate {field} in {self.collection}: {value}"
                    )
