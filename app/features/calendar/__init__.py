"""Planning calendar: the 52-week retail timeline and its fiscal months."""

from app.features.calendar.generator import (
    WEEKS_PER_YEAR,
    CalendarWeek,
    canonical_weeks,
    generate_retail_calendar,
)
from app.features.calendar.routes import router
from app.features.calendar.service import CalendarService

__all__ = [
    "WEEKS_PER_YEAR",
    "CalendarService",
    "CalendarWeek",
    "canonical_weeks",
    "generate_retail_calendar",
    "router",
]
