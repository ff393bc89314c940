"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient

from core.telemetry import SERVICE_NAME

pytestmark = pytest.mark.unit


class TestHealthEndpoints:
    async def test_health_returns_200(self, client: AsyncClient):
        """GET /health returns 200 with healthy status."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": SERVICE_NAME}

    async def test_health_ignores_roster_state(
        self, client: AsyncClient, use_roster, failing_roster_source
    ):
        use_roster(failing_roster_source)

        response = await client.get("/health")

        assert response.status_code == 200
        failing_roster_source.load.assert_not_called()


class TestReadyEndpoint:
    async def test_ready_when_roster_loads(
        self, client: AsyncClient, use_roster, roster_source
    ):
        use_roster(roster_source)

        response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    async def test_ready_with_empty_roster(self, client: AsyncClient, use_roster):
        from repositories.roster_repository import StaticRosterSource

        use_roster(StaticRosterSource([]))

        response = await client.get("/ready")

        assert response.status_code == 200

    async def test_not_ready_when_roster_fails(
        self, client: AsyncClient, use_roster, failing_roster_source
    ):
        use_roster(failing_roster_source)

        response = await client.get("/ready")

        assert response.status_code == 503
        assert response.json() == {"message": "Roster unavailable"}
