"""
Health check endpoints for the Competitive Content Intelligence Engine.

This module provides health check and probe endpoints
for monitoring and diagnostics.
"""

import time
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from competitor_intel.analysis.engine import CompetitiveIntelligenceEngine
from competitor_intel.core.database import get_database
from competitor_intel.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()

_STARTED_AT = time.monotonic()


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    timestamp: datetime
    version: str = "1.0.0"
    database_connected: bool
    uptime_seconds: float


class DetailedHealthResponse(HealthResponse):
    """Detailed health response with component status."""
    components: dict


async def _ping_database() -> bool:
    try:
        await get_database().command("ping")
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


def _uptime() -> float:
    return round(time.monotonic() - _STARTED_AT, 3)


@router.get("/", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint."""
    db_connected = await _ping_database()

    return HealthResponse(
        status="healthy" if db_connected else "degraded",
        timestamp=datetime.now(timezone.utc),
        database_connected=db_connected,
        uptime_seconds=_uptime()
    )


@router.get("/detailed", response_model=DetailedHealthResponse)
async def detailed_health_check():
    """Detailed health check with component status."""
    components = {}

    if await _ping_database():
        components["database"] = {"status": "healthy", "message": "Connected"}
    else:
        components["database"] = {"status": "unhealthy", "message": "Ping failed"}

    components["engine"] = {
        "status": "healthy",
        "message": f"Modes: {', '.join(CompetitiveIntelligenceEngine.supported_modes())}"
    }

    overall_status = "healthy" if all(
        comp["status"] == "healthy" for comp in components.values()
    ) else "degraded"

    return DetailedHealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        database_connected=components["database"]["status"] == "healthy",
        uptime_seconds=_uptime(),
        components=components
    )


@router.get("/ready")
async def readiness_check():
    """Readiness probe endpoint."""
    if await _ping_database():
        return {"status": "ready"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not ready"}
    )


@router.get("/live")
async def liveness_check():
    """Liveness probe endpoint."""
    return {"status": "alive"}
