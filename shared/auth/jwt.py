"""
Operator Access Tokens
======================

Bearer tokens handed out at login. A token names the operator account it
was issued to and is scoped to one deployment by its ``iss`` and ``aud``
claims, so a token signed for another deployment with a shared secret is
still rejected.

Version: 0.1.0
"""

from datetime import UTC, datetime, timedelta

import pydantic
from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict

from shared.config import settings
from shared.logging import get_logger


logger = get_logger(__name__)


class OperatorClaims(BaseModel):
    """Verified claims of an operator access token."""

    model_config = ConfigDict(frozen=True)

    sub: str
    username: str
    email: str
    iss: str
    aud: str
    iat: datetime
    exp: datetime

    @property
    def lifetime(self) -> timedelta:
        return self.exp - self.iat


def create_access_token(
    user_id: str,
    username: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Sign an access token for an operator account.

    Args:
        user_id: Account id, stored as ``sub``
        username: Login name
        email: Account email
        expires_delta: Token lifetime (default JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        str: Encoded JWT
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt.access_token_expire_minutes)

    issued_at = datetime.now(UTC)
    claims = {
        "sub": user_id,
        "username": username,
        "email": email,
        "iss": settings.jwt.issuer,
        "aud": settings.jwt.audience,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }

    token = jwt.encode(
        claims,
        settings.jwt.secret_key.get_secret_value(),
        algorithm=settings.jwt.algorithm,
    )

    logger.debug(
        "access_token_issued",
        user_id=user_id,
        expires_at=claims["exp"].isoformat(),
    )

    return token


def decode_token(token: str) -> OperatorClaims | None:
    """
    Verify signature, expiry, issuer and audience of a token.

    Returns:
        OperatorClaims, or None when any check fails or a claim is missing
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt.secret_key.get_secret_value(),
            algorithms=[settings.jwt.algorithm],
            audience=settings.jwt.audience,
            issuer=settings.jwt.issuer,
        )
    except JWTError as e:
        logger.warning("access_token_rejected", reason=type(e).__name__, error=str(e))
        return None

    try:
        return OperatorClaims.model_validate(payload)
    except pydantic.ValidationError as e:
        missing = sorted(str(error["loc"][0]) for error in e.errors() if error["loc"])
        logger.warning("access_token_incomplete", claims=missing)
        return None
