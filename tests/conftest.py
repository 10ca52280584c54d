"""
Test Configuration
==================

Pytest fixtures for Tierwise tests.
"""

import os
from collections.abc import AsyncGenerator, Callable, Generator
from datetime import UTC, datetime
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["STORAGE_BACKEND"] = "memory"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture(autouse=True)
def memory_stores() -> Generator[None, None, None]:
    """Fresh in-memory stores for every test."""
    from services.client_evaluation.storage import reset_stores

    reset_stores()
    yield
    reset_stores()


@pytest_asyncio.fixture
async def client_evaluation_client() -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the Client Evaluation Service."""
    from services.client_evaluation.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock pinned to a known instant."""
    moment = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)
    return lambda: moment


@pytest.fixture
def sample_evaluation_data() -> dict[str, Any]:
    """Evaluation request body as the frontend sends it."""
    return {
        "clientName": "Acme",
        "clientEmail": "a@acme.io",
        "clientWebsite": "https://acme.io",
        "score": 750,
        "preciseScore": 740,
        "totalScore": 750,
    }


@pytest.fixture
def sample_client_data() -> dict[str, Any]:
    """Client registration body."""
    return {
        "name": "Acme",
        "email": "a@acme.io",
        "website": "https://acme.io",
    }


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Generate test authentication headers."""
    from shared.auth import create_access_token

    token = create_access_token("507f1f77bcf86cd799439011", "tester", "test@tierwise.io")
    return {"Authorization": f"Bearer {token}"}
