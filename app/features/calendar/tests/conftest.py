"""Test fixtures for calendar module."""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_db
from app.features.calendar.generator import CalendarWeek
from app.features.calendar.service import CalendarService, get_calendar_service
from app.main import app


class InMemoryCalendarRepository:
    """In-memory CalendarRepositoryProtocol implementation for tests."""

    def __init__(self) -> None:
        self.weeks: dict[int, CalendarWeek] = {}

    async def list_weeks(self, db: Any) -> list[CalendarWeek]:
        return [self.weeks[seq_no] for seq_no in sorted(self.weeks)]

    async def insert_missing(self, db: Any, rows: list[dict[str, Any]]) -> int:
        inserted = 0
        for row in rows:
            if row["seq_no"] in self.weeks:
                continue
            self.weeks[row["seq_no"]] = CalendarWeek(**row)
            inserted += 1
        return inserted


@pytest.fixture
def repository() -> InMemoryCalendarRepository:
    """Empty in-memory calendar repository."""
    return InMemoryCalendarRepository()


@pytest.fixture
def service(repository: InMemoryCalendarRepository) -> CalendarService:
    """CalendarService backed by the in-memory repository."""
    return CalendarService(repository=repository)


@pytest.fixture
def mock_session() -> AsyncMock:
    """Stand-in for AsyncSession."""
    return AsyncMock()


@pytest.fixture
async def client(service: CalendarService) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the in-memory calendar service."""

    async def override_get_db() -> AsyncGenerator[AsyncMock, None]:
        yield AsyncMock()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_calendar_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
