"""
Storage Module
==============

Document stores for clients, evaluations and users.

Supports:
- MongoDB via Motor (default)
- In-memory (development/testing)

Usage:
    from services.client_evaluation.storage import EVALUATIONS, get_store

    store = get_store(EVALUATIONS)
    document = await store.find_by_id(evaluation_id)
"""

from services.client_evaluation.storage.base import Document, DocumentStore
from services.client_evaluation.storage.memory import MemoryDocumentStore
from shared.config import StorageBackend, settings
from shared.logging import get_logger

logger = get_logger(__name__)


CLIENTS = "clients"
EVALUATIONS = "evaluations"
USERS = "users"

UNIQUE_FIELDS: dict[str, tuple[str, ...]] = {
    CLIENTS: ("email",),
    EVALUATIONS: (),
    USERS: ("email", "username"),
}


# Process-wide store instances, one per collection
_stores: dict[str, DocumentStore] = {}


def get_store(collection: str) -> DocumentStore:
    """
    Get the configured store for a collection.

    Args:
        collection: One of CLIENTS, EVALUATIONS, USERS

    Returns:
        DocumentStore instance based on settings
    """
    if collection not in _stores:
        backend = settings.storage.backend
        unique_fields = UNIQUE_FIELDS.get(collection, ())

        if backend == StorageBackend.MEMORY:
            _stores[collection] = MemoryDocumentStore(collection, unique_fields)
        elif backend == StorageBackend.MONGODB:
            from services.client_evaluation.storage.mongodb import MongoDocumentStore

            _stores[collection] = MongoDocumentStore(collection, unique_fields)
        else:
            raise ValueError(f"Unknown storage backend: {backend}")

        logger.info(
            "document_store_initialized",
            collection=collection,
            backend=backend.value,
        )

    return _stores[collection]


def set_store(collection: str, store: DocumentStore) -> None:
    """
    Set a custom store for a collection.

    Args:
        collection: Collection name
        store: DocumentStore instance
    """
    _stores[collection] = store
    logger.info(
        "document_store_set",
        collection=collection,
        backend=store.backend,
    )


def reset_stores() -> None:
    """Drop all store instances so they are re-created on next use."""
    _stores.clear()


__all__ = [
    "CLIENTS",
    "EVALUATIONS",
    "USERS",
    "Document",
    "DocumentStore",
    "MemoryDocumentStore",
    "get_store",
    "reset_stores",
    "set_store",
]
