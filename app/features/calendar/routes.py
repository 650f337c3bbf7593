"""API routes for the planning calendar."""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import DatabaseError
from app.core.logging import get_logger
from app.features.calendar.schemas import CalendarResponse, CalendarSeedResponse
from app.features.calendar.service import CalendarService, get_calendar_service

logger = get_logger(__name__)

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get(
    "",
    response_model=CalendarResponse,
    summary="List the planning calendar",
)
async def list_calendar(
    db: AsyncSession = Depends(get_db),
    service: CalendarService = Depends(get_calendar_service),
) -> CalendarResponse:
    """List stored calendar weeks ordered by seq_no.

    Args:
        db: Database session.
        service: Calendar service.

    Returns:
        Stored calendar weeks.
    """
    try:
        return await service.list_calendar(db)
    except SQLAlchemyError as e:
        logger.error(
            "calendar.list_request_failed",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        raise DatabaseError(message="Failed to list calendar", details={"error": str(e)}) from e


@router.post(
    "/seed",
    response_model=CalendarSeedResponse,
    summary="Seed the 52-week retail calendar",
    description="""
Insert the 4-5-4 retail calendar (W01-W52, fiscal year starting in February).

**Idempotent:** weeks already stored are left untouched, so calling this
twice inserts nothing the second time.
""",
)
async def seed_calendar(
    db: AsyncSession = Depends(get_db),
    service: CalendarService = Depends(get_calendar_service),
) -> CalendarSeedResponse:
    """Seed the planning calendar.

    Args:
        db: Database session.
        service: Calendar service.

    Returns:
        Inserted and pre-existing week counts.
    """
    try:
        return await service.seed_calendar(db)
    except SQLAlchemyError as e:
        logger.error(
            "calendar.seed_request_failed",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        raise DatabaseError(message="Failed to seed calendar", details={"error": str(e)}) from e
