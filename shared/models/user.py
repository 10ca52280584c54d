"""
User Models
===========

Operator accounts used for login.

Version: 0.1.0
"""

from datetime import datetime

from pydantic import Field

from shared.models.common import CamelModel


class UserCreate(CamelModel):
    """Request model for registering an operator account."""

    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=72)


class LoginRequest(CamelModel):
    """Credentials submitted at login."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AccessToken(CamelModel):
    """Bearer token issued at login."""

    access_token: str
    token_type: str = "bearer"


class UserProfile(CamelModel):
    """Public view of an operator account. Never carries the password hash."""

    id: str
    username: str
    email: str
    created_at: datetime | None = None
