"""
Tests for the main application module.

This module tests the FastAPI application initialization,
health endpoints, and basic functionality.
"""

import pytest
from unittest.mock import AsyncMock


@pytest.mark.asyncio
async def test_root_endpoint(client):
    """Test the root endpoint returns correct information."""
    response = await client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert data["message"] == "Competitive Content Intelligence Engine"
    assert data["version"] == "1.0.0"
    assert data["status"] == "running"


@pytest.mark.asyncio
async def test_health_endpoint(client):
    """Test the health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_api_health_endpoint(client):
    """Test the API health check endpoint."""
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["database_connected"] is True
    assert data["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_detailed_health_endpoint(client):
    """Test the detailed health check endpoint."""
    response = await client.get("/api/v1/health/detailed")
    assert response.status_code == 200

    data = response.json()
    assert data["components"]["database"]["status"] == "healthy"
    assert "comprehensive" in data["components"]["engine"]["message"]


@pytest.mark.asyncio
async def test_degraded_when_database_unreachable(client, mock_database):
    """Test that a failed ping degrades health and readiness."""
    mock_database.command = AsyncMock(side_effect=Exception("no server"))

    health = await client.get("/api/v1/health/")
    ready = await client.get("/api/v1/health/ready")

    assert health.json()["status"] == "degraded"
    assert ready.status_code == 503
    assert ready.json()["status"] == "not ready"


@pytest.mark.asyncio
async def test_readiness_endpoint(client):
    """Test the readiness probe endpoint."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_liveness_endpoint(client):
    """Test the liveness probe endpoint."""
    response = await client.get("/api/v1/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "alive"


@pytest.mark.asyncio
async def test_unknown_route(client):
    """Test that unknown routes use the error envelope."""
    response = await client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"
