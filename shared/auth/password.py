"""
Password Hashing
================

Bcrypt hashing for operator passwords.

The work factor comes from ``JWT_BCRYPT_ROUNDS``. Hashes made with a
different work factor still verify, and ``needs_rehash`` reports them so
they can be upgraded at the next successful login.

Version: 0.1.0
"""

from passlib.context import CryptContext

from shared.config import settings

_pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.jwt.bcrypt_rounds,
    bcrypt__min_rounds=settings.jwt.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """Hash a plain text password with the configured work factor."""
    return _pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a password against a stored hash.

    Malformed hashes count as a mismatch.
    """
    try:
        return _pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def needs_rehash(hashed_password: str) -> bool:
    """True when a stored hash was made with a weaker work factor."""
    return _pwd_context.needs_update(hashed_password)
