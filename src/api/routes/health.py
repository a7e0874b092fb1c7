"""Health check endpoints."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from core.config import settings
from infrastructure.database.session import async_session_factory

logger = structlog.get_logger()

router = APIRouter(tags=["health"])

VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    storage: str | None = None


async def check_storage() -> str:
    """Report whether the configured profile store is reachable."""
    if settings.storage_backend == "memory":
        return "healthy"

    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("storage_health_check_failed", error=str(e))
        return "unhealthy"
    return "healthy"


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without checking dependencies. Fast and lightweight.
    """
    return HealthResponse(
        status="healthy",
        version=VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check() -> HealthResponse:
    """
    Detailed health check including storage connectivity.

    Use for monitoring dashboards that need to verify all dependencies.
    """
    storage_status = await check_storage()
    overall_status = "healthy" if storage_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall_status,
        version=VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        storage=storage_status,
    )
