"""
Client and Account Service Tests
================================

Tests for client registration and operator accounts.

Version: 0.1.0
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest
from passlib.hash import bcrypt as passlib_bcrypt

from services.client_evaluation.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from services.client_evaluation.services import ClientService, UserService
from services.client_evaluation.storage import UNIQUE_FIELDS
from services.client_evaluation.storage.memory import MemoryDocumentStore
from shared.auth import decode_token, verify_password
from shared.models.user import LoginRequest, UserCreate


@pytest.fixture
def client_service(fixed_clock: Callable[[], datetime]) -> ClientService:
    store = MemoryDocumentStore("clients", UNIQUE_FIELDS["clients"])
    return ClientService(store, clock=fixed_clock)


@pytest.fixture
def user_service(fixed_clock: Callable[[], datetime]) -> UserService:
    store = MemoryDocumentStore("users", UNIQUE_FIELDS["users"])
    return UserService(store, clock=fixed_clock)


@pytest.fixture
def operator() -> UserCreate:
    return UserCreate(username="ops", email="ops@tierwise.io", password="s3cret-pass")


# =============================================================================
# Client Registry Tests
# =============================================================================


class TestClientService:
    """Tests for client registration."""

    @pytest.mark.asyncio
    async def test_register(
        self,
        client_service: ClientService,
        sample_client_data: dict[str, Any],
        fixed_clock: Callable[[], datetime],
    ) -> None:
        client = await client_service.register(sample_client_data)

        assert client.id
        assert client.name == "Acme"
        assert client.created_at == fixed_clock()

    @pytest.mark.asyncio
    async def test_duplicate_email(
        self,
        client_service: ClientService,
        sample_client_data: dict[str, Any],
    ) -> None:
        await client_service.register(sample_client_data)

        with pytest.raises(ConflictError) as exc_info:
            await client_service.register({**sample_client_data, "name": "Acme Again"})

        assert "a@acme.io" in exc_info.value.message
        assert len(await client_service.list_all()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "data",
        [
            {"email": "a@acme.io"},
            {"name": "Acme"},
            {"name": "", "email": "a@acme.io"},
            {"name": "Acme", "email": ""},
        ],
    )
    async def test_name_and_email_required(
        self,
        client_service: ClientService,
        data: dict[str, Any],
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await client_service.register(data)

        assert exc_info.value.message == "Name and email are required"
        assert await client_service.list_all() == []


# =============================================================================
# Account Tests
# =============================================================================


class TestUserService:
    """Tests for operator registration and login."""

    @pytest.mark.asyncio
    async def test_register_hides_password(
        self,
        user_service: UserService,
        operator: UserCreate,
    ) -> None:
        profile = await user_service.register(operator)

        assert profile.username == "ops"
        assert "password" not in profile.model_dump()

        stored = await user_service.store.find_by_id(profile.id)
        assert stored is not None
        assert stored["password"] != "s3cret-pass"

    @pytest.mark.asyncio
    async def test_register_duplicate(
        self,
        user_service: UserService,
        operator: UserCreate,
    ) -> None:
        await user_service.register(operator)

        with pytest.raises(ConflictError):
            await user_service.register(
                UserCreate(username="other", email=operator.email, password="x")
            )

    @pytest.mark.asyncio
    async def test_login_issues_token(
        self,
        user_service: UserService,
        operator: UserCreate,
    ) -> None:
        profile = await user_service.register(operator)

        token = await user_service.login(
            LoginRequest(username="ops", password="s3cret-pass")
        )

        decoded = decode_token(token.access_token)
        assert decoded is not None
        assert decoded.sub == profile.id
        assert decoded.username == "ops"
        assert token.token_type == "bearer"

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, user_service: UserService) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            await user_service.login(LoginRequest(username="nobody", password="x"))

        assert exc_info.value.message == "User not found"

    @pytest.mark.asyncio
    async def test_login_wrong_password(
        self,
        user_service: UserService,
        operator: UserCreate,
    ) -> None:
        await user_service.register(operator)

        with pytest.raises(AuthenticationError) as exc_info:
            await user_service.login(LoginRequest(username="ops", password="wrong"))

        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_profile_of_deleted_user(self, user_service: UserService) -> None:
        with pytest.raises(NotFoundError):
            await user_service.get_profile("gone")

    @pytest.mark.asyncio
    async def test_login_upgrades_weak_hash(self, user_service: UserService) -> None:
        """A hash made with fewer rounds is replaced after a good login."""
        weak = passlib_bcrypt.using(rounds=4).hash("s3cret-pass")
        stored = await user_service.store.insert(
            {"username": "legacy", "email": "legacy@tierwise.io", "password": weak}
        )

        await user_service.login(LoginRequest(username="legacy", password="s3cret-pass"))

        upgraded = await user_service.store.find_by_id(stored["id"])
        assert upgraded is not None
        assert upgraded["password"] != weak
        assert upgraded["password"].startswith("$2b$10$")
        assert verify_password("s3cret-pass", upgraded["password"])
