"""Integration tests for /health, /health/ready and /metrics endpoints."""

import pytest
from unittest.mock import MagicMock, patch

from httpx import AsyncClient


class TestLivenessEndpoint:
    @pytest.mark.asyncio
    async def test_liveness_returns_healthy(self, client: AsyncClient):
        """GET /health returns 200 with status healthy."""
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


class TestReadinessEndpoint:
    @pytest.mark.asyncio
    async def test_readiness_checks_database(self, client: AsyncClient):
        """GET /health/ready reports the database check."""
        resp = await client.get("/health/ready")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ready"
        assert data["checks"] == {"database": "ok"}

    @pytest.mark.asyncio
    async def test_readiness_returns_503_on_failure(self, client: AsyncClient):
        """GET /health/ready returns 503 when the database is unreachable."""
        with patch("atf_optimizer.api.deps.engine") as mock_engine:
            mock_engine.connect = MagicMock(side_effect=Exception("Connection refused"))

            resp = await client.get("/health/ready")
            assert resp.status_code == 503
            data = resp.json()
            assert data["status"] == "not ready"
            assert data["checks"]["database"].startswith("error:")


class TestMetricsEndpoint:
    @pytest.mark.asyncio
    async def test_metrics_exposed(self, client: AsyncClient):
        await client.post("/v1/lcp/optimize", json={"html": "<html></html>"})
        resp = await client.get("/metrics")
        assert resp.status_code == 200
        assert "lcp_optimizations_total" in resp.text

    @pytest.mark.asyncio
    async def test_metrics_disabled(self, client: AsyncClient):
        with patch("atf_optimizer.api.v1.health.settings") as mock_settings:
            mock_settings.METRICS_ENABLED = False
            resp = await client.get("/metrics")
            assert resp.status_code == 404
