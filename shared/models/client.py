"""
Client Models
=============

Models for the organizations an operator registers for evaluation.

Version: 0.1.0
"""

from datetime import datetime

from pydantic import Field

from shared.models.common import CamelModel


class ClientCreate(CamelModel):
    """Request model for registering a client."""

    name: str = Field(..., min_length=1, max_length=500)
    email: str = Field(..., min_length=1, max_length=320)
    website: str | None = Field(default=None, max_length=2048)


class Client(ClientCreate):
    """Stored client."""

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
