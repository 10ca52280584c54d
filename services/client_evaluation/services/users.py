"""
Operator Account Service
========================

Registration and login for the operators who use the platform.

Version: 0.1.0
"""

from typing import Any

from services.client_evaluation.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
)
from services.client_evaluation.services.priority import Clock, utc_now
from services.client_evaluation.storage.base import DocumentStore
from shared.auth import create_access_token, hash_password, needs_rehash, verify_password
from shared.logging import get_logger
from shared.models.user import AccessToken, LoginRequest, UserCreate, UserProfile


logger = get_logger(__name__)


class UserService:
    """Service for operator accounts."""

    def __init__(self, store: DocumentStore, clock: Clock = utc_now) -> None:
        self.store = store
        self.clock = clock

    async def register(self, data: UserCreate) -> UserProfile:
        """
        Create an operator account with a bcrypt-hashed password.

        Raises:
            ConflictError: Email or username already registered
        """
        if await self.store.find_one({"email": data.email}) or await self.store.find_one(
            {"username": data.username}
        ):
            raise ConflictError("User already exists.")

        document = {
            "username": data.username,
            "email": data.email,
            "password": hash_password(data.password),
            "createdAt": self.clock().isoformat(),
        }

        try:
            stored = await self.store.insert(document)
        except ConflictError as e:
            raise ConflictError("User already exists.") from e

        logger.info("user_registered", user_id=stored["id"], username=data.username)

        return UserProfile.model_validate(stored)

    async def login(self, credentials: LoginRequest) -> AccessToken:
        """
        Check credentials and issue an access token.

        Raises:
            AuthenticationError: Unknown username or wrong password
        """
        user = await self.store.find_one({"username": credentials.username})
        if user is None:
            logger.warning("login_unknown_user", username=credentials.username)
            raise AuthenticationError("User not found")

        if not verify_password(credentials.password, user["password"]):
            logger.warning("login_invalid_credentials", username=credentials.username)
            raise AuthenticationError("Invalid credentials")

        if needs_rehash(user["password"]):
            await self._upgrade_hash(user, credentials.password)

        token = create_access_token(user["id"], user["username"], user["email"])

        logger.info("user_logged_in", user_id=user["id"])

        return AccessToken(access_token=token)

    async def _upgrade_hash(self, user: dict[str, Any], password: str) -> None:
        # Losing a race here is harmless: the old hash still verifies
        document = {k: v for k, v in user.items() if k != "id"}
        document["password"] = hash_password(password)

        stored = await self.store.replace(
            user["id"],
            document,
            expected_version=user.get("version", 0),
        )
        if stored is not None:
            logger.info("user_password_rehashed", user_id=user["id"])

    async def get_profile(self, user_id: str) -> UserProfile:
        """
        Raises:
            NotFoundError: Account no longer exists
        """
        user = await self.store.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return UserProfile.model_validate(user)
