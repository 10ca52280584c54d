"""
Client Evaluation Routes Tests
==============================

Tests for the HTTP API, run against in-memory stores.

Version: 0.1.0
"""

from typing import Any

import pytest
from fastapi import status
from httpx import AsyncClient

from services.client_evaluation.storage import set_store
from services.client_evaluation.storage.memory import MemoryDocumentStore


EVALUATIONS = "/api/v1/evaluations"
CLIENTS = "/api/v1/clients"
AUTH = "/api/v1/auth"


class UnhealthyStore(MemoryDocumentStore):
    """Memory store reporting a failed health check."""

    async def health_check(self) -> dict[str, Any]:
        return {"status": "unhealthy", "backend": self.backend}


# =============================================================================
# Health Tests
# =============================================================================


class TestHealth:
    """Tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client_evaluation_client: AsyncClient) -> None:
        response = await client_evaluation_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["status"] == "healthy"
        assert set(body["components"]) == {"clients", "evaluations", "users"}

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client_evaluation_client: AsyncClient) -> None:
        response = await client_evaluation_client.get("/", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_degraded_when_a_store_is_unhealthy(
        self,
        client_evaluation_client: AsyncClient,
    ) -> None:
        set_store("evaluations", UnhealthyStore("evaluations"))

        response = await client_evaluation_client.get("/health")

        body = response.json()
        assert body["status"] == "degraded"
        assert body["components"]["evaluations"]["status"] == "unhealthy"
        assert body["components"]["clients"]["status"] == "healthy"


# =============================================================================
# Error Body Tests
# =============================================================================


class TestErrorBodies:
    """Framework errors use the same body as domain errors."""

    @pytest.mark.asyncio
    async def test_unknown_route(self, client_evaluation_client: AsyncClient) -> None:
        response = await client_evaluation_client.get("/api/v1/nothing-here")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"success": False, "msg": "Not Found", "statusCode": 404}

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, client_evaluation_client: AsyncClient) -> None:
        response = await client_evaluation_client.patch(EVALUATIONS)

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        body = response.json()
        assert body["success"] is False
        assert body["statusCode"] == 405
        assert "allow" in response.headers


# =============================================================================
# Client Route Tests
# =============================================================================


class TestClientRoutes:
    """Tests for client registration endpoints."""

    @pytest.mark.asyncio
    async def test_add_and_list(
        self,
        client_evaluation_client: AsyncClient,
        sample_client_data: dict[str, Any],
    ) -> None:
        response = await client_evaluation_client.post(CLIENTS, json=sample_client_data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["msg"] == "Client added successfully!"

        listing = await client_evaluation_client.get(CLIENTS)
        clients = listing.json()
        assert len(clients) == 1
        assert clients[0]["email"] == "a@acme.io"
        assert "createdAt" in clients[0]

    @pytest.mark.asyncio
    async def test_missing_email(self, client_evaluation_client: AsyncClient) -> None:
        response = await client_evaluation_client.post(CLIENTS, json={"name": "Acme"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["success"] is False
        assert body["statusCode"] == 400

    @pytest.mark.asyncio
    async def test_duplicate_email(
        self,
        client_evaluation_client: AsyncClient,
        sample_client_data: dict[str, Any],
    ) -> None:
        await client_evaluation_client.post(CLIENTS, json=sample_client_data)
        response = await client_evaluation_client.post(CLIENTS, json=sample_client_data)

        assert response.status_code == status.HTTP_409_CONFLICT


# =============================================================================
# Evaluation Route Tests
# =============================================================================


class TestEvaluationRoutes:
    """Tests for the evaluation lifecycle endpoints."""

    @pytest.mark.asyncio
    async def test_create_and_get(
        self,
        client_evaluation_client: AsyncClient,
        sample_evaluation_data: dict[str, Any],
    ) -> None:
        response = await client_evaluation_client.post(EVALUATIONS, json=sample_evaluation_data)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["msg"] == "Evaluation added successfully!"

        fetched = await client_evaluation_client.get(f"{EVALUATIONS}/{body['id']}")
        evaluation = fetched.json()
        assert evaluation["tier"] == "Tier2"
        assert evaluation["priority"] == "Update"
        assert evaluation["isEvaluationFinished"] is False
        assert len(evaluation["recommendationNotes"]) == 3

    @pytest.mark.asyncio
    async def test_create_missing_fields(self, client_evaluation_client: AsyncClient) -> None:
        response = await client_evaluation_client.post(
            EVALUATIONS,
            json={"clientName": "Acme", "score": 10},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "clientEmail" in response.json()["msg"]

        listing = await client_evaluation_client.get(EVALUATIONS)
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_update_categories(
        self,
        client_evaluation_client: AsyncClient,
        sample_evaluation_data: dict[str, Any],
    ) -> None:
        created = await client_evaluation_client.post(EVALUATIONS, json=sample_evaluation_data)
        evaluation_id = created.json()["id"]

        response = await client_evaluation_client.put(
            f"{EVALUATIONS}/{evaluation_id}/categories",
            json={
                "categories": {
                    "financialHealth": {"score": 200, "preciseScore": 190},
                    "strategicFit": {"score": 150, "preciseScore": 140},
                }
            },
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["msg"] == "Categories updated successfully"
        updated = body["updatedEvaluation"]
        assert updated["score"] == 350
        assert updated["preciseScore"] == 330
        assert updated["tier"] == "Tier4"
        assert updated["isEvaluationFinished"] is True
        assert updated["categories"]["financialHealth"]["score"] == 200

    @pytest.mark.asyncio
    async def test_update_without_categories(
        self,
        client_evaluation_client: AsyncClient,
        sample_evaluation_data: dict[str, Any],
    ) -> None:
        created = await client_evaluation_client.post(EVALUATIONS, json=sample_evaluation_data)

        response = await client_evaluation_client.put(
            f"{EVALUATIONS}/{created.json()['id']}/categories",
            json={},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, client_evaluation_client: AsyncClient) -> None:
        response = await client_evaluation_client.put(
            f"{EVALUATIONS}/507f1f77bcf86cd799439011/categories",
            json={"categories": {"riskProfile": {"score": 1}}},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_refresh_priority(
        self,
        client_evaluation_client: AsyncClient,
        sample_evaluation_data: dict[str, Any],
    ) -> None:
        created = await client_evaluation_client.post(EVALUATIONS, json=sample_evaluation_data)

        response = await client_evaluation_client.post(
            f"{EVALUATIONS}/{created.json()['id']}/priority"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["priority"] == "Update"

    @pytest.mark.asyncio
    async def test_delete_twice(
        self,
        client_evaluation_client: AsyncClient,
        sample_evaluation_data: dict[str, Any],
    ) -> None:
        created = await client_evaluation_client.post(EVALUATIONS, json=sample_evaluation_data)
        url = f"{EVALUATIONS}/{created.json()['id']}"

        first = await client_evaluation_client.delete(url)
        second = await client_evaluation_client.delete(url)

        assert first.status_code == status.HTTP_200_OK
        assert first.json()["msg"] == "Evaluation deleted successfully"
        assert second.status_code == status.HTTP_404_NOT_FOUND
        assert second.json()["success"] is False

    @pytest.mark.asyncio
    async def test_delete_nonexistent_twice(self, client_evaluation_client: AsyncClient) -> None:
        url = f"{EVALUATIONS}/507f1f77bcf86cd799439011"

        first = await client_evaluation_client.delete(url)
        second = await client_evaluation_client.delete(url)

        assert first.status_code == status.HTTP_404_NOT_FOUND
        assert second.status_code == status.HTTP_404_NOT_FOUND
        assert second.json()["statusCode"] == 404


# =============================================================================
# Auth Route Tests
# =============================================================================


class TestAuthRoutes:
    """Tests for operator registration and login."""

    @pytest.mark.asyncio
    async def test_register_login_me(self, client_evaluation_client: AsyncClient) -> None:
        register = await client_evaluation_client.post(
            f"{AUTH}/register",
            json={"username": "ops", "email": "ops@tierwise.io", "password": "s3cret-pass"},
        )
        assert register.status_code == status.HTTP_201_CREATED

        login = await client_evaluation_client.post(
            f"{AUTH}/login",
            json={"username": "ops", "password": "s3cret-pass"},
        )
        assert login.status_code == status.HTTP_200_OK
        token = login.json()["accessToken"]

        me = await client_evaluation_client.get(
            f"{AUTH}/me",
            headers={"Authorization": f"Bearer {token}"},
        )
        assert me.status_code == status.HTTP_200_OK
        assert me.json()["username"] == "ops"
        assert "password" not in me.json()

    @pytest.mark.asyncio
    async def test_login_bad_password(self, client_evaluation_client: AsyncClient) -> None:
        await client_evaluation_client.post(
            f"{AUTH}/register",
            json={"username": "ops", "email": "ops@tierwise.io", "password": "s3cret-pass"},
        )

        response = await client_evaluation_client.post(
            f"{AUTH}/login",
            json={"username": "ops", "password": "nope"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["msg"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_me_requires_token(self, client_evaluation_client: AsyncClient) -> None:
        response = await client_evaluation_client.get(f"{AUTH}/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_me_rejects_basic_scheme(self, client_evaluation_client: AsyncClient) -> None:
        response = await client_evaluation_client.get(
            f"{AUTH}/me",
            headers={"Authorization": "Basic b3BzOnMzY3JldA=="},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["statusCode"] == 401

    @pytest.mark.asyncio
    async def test_me_for_removed_account(
        self,
        client_evaluation_client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        """A valid token for an account that no longer exists is not found."""
        response = await client_evaluation_client.get(f"{AUTH}/me", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
