"""
Document Store Interface
========================

Abstract storage collaborator for the client evaluation service.

Documents are plain JSON-compatible dicts keyed by a string ``id``.
Evaluation writes are guarded by a ``version`` field: ``replace`` only
succeeds when the stored version matches the one the caller read.

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from typing import Any


Document = dict[str, Any]


class DocumentStore(ABC):
    """Abstract single-collection document store."""

    def __init__(self, collection: str, unique_fields: tuple[str, ...] = ()) -> None:
        """
        Args:
            collection: Collection name
            unique_fields: Fields whose values must be unique across documents
        """
        self.collection = collection
        self.unique_fields = unique_fields

    @property
    @abstractmethod
    def backend(self) -> str:
        """Backend name reported by health checks."""
        ...

    @abstractmethod
    async def insert(self, document: Document) -> Document:
        """
        Insert a new document.

        Returns:
            The stored document including its assigned ``id``

        Raises:
            ConflictError: A unique field value is already taken
            StorageError: The backend failed
        """
        ...

    @abstractmethod
    async def find_by_id(self, doc_id: str) -> Document | None:
        """Get a document by id, or None if it does not exist."""
        ...

    @abstractmethod
    async def find_one(self, filters: dict[str, Any]) -> Document | None:
        """Get the first document whose fields equal every filter value."""
        ...

    @abstractmethod
    async def find_all(self) -> list[Document]:
        """Get every document in storage order."""
        ...

    @abstractmethod
    async def replace(
        self,
        doc_id: str,
        document: Document,
        expected_version: int,
    ) -> Document | None:
        """
        Replace a document if its stored version equals ``expected_version``.

        The stored copy gets ``version = expected_version + 1``.

        Returns:
            The stored document, or None when the id is missing or the
            version no longer matches
        """
        ...

    @abstractmethod
    async def delete_by_id(self, doc_id: str) -> Document | None:
        """Delete a document by id, returning it, or None if it did not exist."""
        ...

    async def health_check(self) -> dict[str, Any]:
        """Report store health."""
        return {"status": "healthy", "backend": self.backend}
