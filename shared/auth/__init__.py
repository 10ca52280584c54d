"""
Authentication Module
=====================

Operator authentication for Tierwise services.

Features:
- Access tokens scoped by issuer and audience
- Password hashing with bcrypt, upgraded on login when the work factor rises
- FastAPI dependency resolving the operator behind a bearer token

Usage:
    from shared.auth import (
        create_access_token,
        get_current_user,
        hash_password,
        verify_password,
    )

    hashed = hash_password("user_password")

    if verify_password("user_password", hashed):
        token = create_access_token(user_id, username, email)

    @router.get("/me")
    async def me(user: User = Depends(get_current_user)):
        return {"user": user.email}
"""

from shared.auth.jwt import (
    OperatorClaims,
    create_access_token,
    decode_token,
)
from shared.auth.password import hash_password, needs_rehash, verify_password
from shared.auth.dependencies import (
    User,
    bearer_scheme,
    get_current_user,
)

__all__ = [
    # Tokens
    "OperatorClaims",
    "create_access_token",
    "decode_token",
    # Password
    "hash_password",
    "needs_rehash",
    "verify_password",
    # Dependencies
    "User",
    "bearer_scheme",
    "get_current_user",
]
