"""Health check endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging import get_logger
from app.features.calendar.generator import WEEKS_PER_YEAR
from app.features.data_platform.models import Calendar

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["ok", "degraded", "unhealthy"]
    database: Literal["connected", "disconnected"] | None = None
    calendar_weeks: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic liveness check.

    Returns:
        Health status response.
    """
    logger.debug("health.check_started")
    return HealthResponse(status="ok")


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(
    db: AsyncSession = Depends(get_db),
) -> HealthResponse:
    """Readiness check including database connectivity and calendar seeding.

    The service is 'degraded' when the database answers but the calendar
    table does not hold the full planning year yet.

    Args:
        db: Database session dependency.

    Returns:
        Health status with database state.
    """
    logger.debug("health.readiness_check_started")

    try:
        result = await db.execute(select(func.count()).select_from(Calendar))
        calendar_weeks = int(result.scalar_one())
    except SQLAlchemyError as e:
        logger.error(
            "health.database_disconnected",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return HealthResponse(status="unhealthy", database="disconnected")

    logger.info("health.database_connected", calendar_weeks=calendar_weeks)
    status: Literal["ok", "degraded"] = (
        "ok" if calendar_weeks >= WEEKS_PER_YEAR else "degraded"
    )
    return HealthResponse(status=status, database="connected", calendar_weeks=calendar_weeks)
