"""
Client Registry Service
=======================

Registers the organizations that evaluations are recorded against.

Version: 0.1.0
"""

from collections.abc import Mapping
from typing import Any

import pydantic

from services.client_evaluation.exceptions import ConflictError, ValidationError
from services.client_evaluation.services.priority import Clock, utc_now
from services.client_evaluation.storage.base import DocumentStore
from shared.logging import get_logger
from shared.models.client import Client, ClientCreate


logger = get_logger(__name__)


class ClientService:
    """Service for client registration."""

    def __init__(self, store: DocumentStore, clock: Clock = utc_now) -> None:
        self.store = store
        self.clock = clock

    async def register(self, data: ClientCreate | Mapping[str, Any]) -> Client:
        """
        Register a client.

        Raises:
            ValidationError: Name or email missing
            ConflictError: A client with this email already exists
        """
        if isinstance(data, ClientCreate):
            payload = data
        else:
            try:
                payload = ClientCreate.model_validate(data)
            except pydantic.ValidationError as e:
                raise ValidationError("Name and email are required") from e

        now = self.clock()
        document = payload.model_dump(mode="json", by_alias=True, exclude_none=True)
        document["createdAt"] = now.isoformat()
        document["updatedAt"] = now.isoformat()

        try:
            stored = await self.store.insert(document)
        except ConflictError as e:
            logger.warning("client_duplicate_email", email=payload.email)
            raise ConflictError(f"A client with email {payload.email} already exists") from e

        client = Client.model_validate(stored)

        logger.info("client_registered", client_id=client.id, email=client.email)

        return client

    async def list_all(self) -> list[Client]:
        """All registered clients in storage order."""
        return [Client.model_validate(d) for d in await self.store.find_all()]
