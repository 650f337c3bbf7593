"""Service layer for the planning calendar."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.features.calendar.generator import CalendarWeek, generate_retail_calendar
from app.features.calendar.repository import (
    CalendarRepositoryProtocol,
    SqlCalendarRepository,
)
from app.features.calendar.schemas import (
    CalendarResponse,
    CalendarSeedResponse,
    CalendarWeekResponse,
)

logger = get_logger(__name__)


class CalendarService:
    """List, seed, and look up the 52-week planning calendar."""

    def __init__(self, repository: CalendarRepositoryProtocol | None = None) -> None:
        """Initialize calendar service.

        Args:
            repository: Calendar repository (defaults to SQLAlchemy).
        """
        self.repository = repository or SqlCalendarRepository()

    async def list_calendar(self, db: AsyncSession) -> CalendarResponse:
        """Return the stored calendar ordered by seq_no.

        Args:
            db: Database session.

        Returns:
            Stored calendar weeks.
        """
        weeks = await self.repository.list_weeks(db)

        logger.info("calendar.listed", total=len(weeks))

        return CalendarResponse(
            weeks=[CalendarWeekResponse.model_validate(week) for week in weeks],
            total=len(weeks),
        )

    async def seed_calendar(self, db: AsyncSession) -> CalendarSeedResponse:
        """Insert the generated retail calendar, leaving existing weeks untouched.

        Args:
            db: Database session.

        Returns:
            Counts of inserted and pre-existing weeks.
        """
        generated = generate_retail_calendar()
        inserted = await self.repository.insert_missing(db, [w.to_row() for w in generated])

        logger.info(
            "calendar.seeded",
            inserted=inserted,
            existing=len(generated) - inserted,
        )

        return CalendarSeedResponse(
            inserted_count=inserted,
            existing_count=len(generated) - inserted,
        )

    async def get_calendar_weeks(self, db: AsyncSession) -> list[CalendarWeek]:
        """Calendar weeks for month roll-ups.

        Falls back to the generated retail calendar when the table is empty,
        so month buckets are available before seeding.

        Args:
            db: Database session.

        Returns:
            Calendar weeks in seq_no order.
        """
        stored = await self.repository.list_weeks(db)
        if not stored:
            logger.warning("calendar.empty_using_generated")
            return generate_retail_calendar()

        return [
            CalendarWeek(
                seq_no=week.seq_no,
                week=week.week,
                week_label=week.week_label,
                month=week.month,
                month_label=week.month_label,
            )
            for week in stored
        ]


def get_calendar_service() -> CalendarService:
    """FastAPI dependency returning a CalendarService."""
    return CalendarService()
