"""Health check endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema.

    ``degraded`` means the database is unreachable but the dashboard will
    still answer with mock data.
    """

    status: Literal["ok", "degraded", "unhealthy"]
    database: Literal["connected", "disconnected"] | None = None
    fallback_enabled: bool | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness check."""
    logger.debug("health.check_started")
    return HealthResponse(status="ok")


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(
    db: AsyncSession = Depends(get_db),
) -> HealthResponse:
    """Readiness check including database connectivity.

    Args:
        db: Database session dependency.

    Returns:
        Health status with database state.
    """
    settings = get_settings()
    logger.debug("health.readiness_check_started")

    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(
            "health.database_disconnected",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        await db.rollback()
        return HealthResponse(
            status="degraded" if settings.dashboard_fallback_enabled else "unhealthy",
            database="disconnected",
            fallback_enabled=settings.dashboard_fallback_enabled,
        )

    logger.info("health.database_connected")
    return HealthResponse(
        status="ok",
        database="connected",
        fallback_enabled=settings.dashboard_fallback_enabled,
    )
