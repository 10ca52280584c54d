"""
Operator Authentication Dependency
==================================

Resolves the operator behind an ``Authorization: Bearer <token>`` header.
Once resolved, the operator id is bound to the request's log context.

Version: 0.1.0
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from shared.auth.jwt import OperatorClaims, decode_token
from shared.logging import bind_context, get_logger


logger = get_logger(__name__)

bearer_scheme = HTTPBearer(
    auto_error=False,
    scheme_name="OperatorToken",
    description="Access token from POST /api/v1/auth/login",
)


class User(BaseModel):
    """Operator identified by a verified access token."""

    id: str
    username: str
    email: str

    @classmethod
    def from_claims(cls, claims: OperatorClaims) -> "User":
        return cls(id=claims.sub, username=claims.username, email=claims.email)


def _unauthorized(reason: str) -> HTTPException:
    logger.warning("operator_auth_rejected", reason=reason)
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User:
    """
    Raises:
        HTTPException: 401 when the header is absent, not a bearer token,
            or the token fails verification
    """
    if credentials is None:
        raise _unauthorized("missing_bearer_token")

    claims = decode_token(credentials.credentials)
    if claims is None:
        raise _unauthorized("invalid_token")

    bind_context(user_id=claims.sub)
    return User.from_claims(claims)
