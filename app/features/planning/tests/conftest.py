"""Test fixtures for planning module."""

from collections.abc import AsyncGenerator
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_db
from app.features.calendar.generator import CalendarWeek, generate_retail_calendar
from app.features.calendar.service import CalendarService
from app.features.planning.aggregation import PlanningRow
from app.features.planning.service import PlanningService, get_planning_service
from app.main import app


class InMemoryPlanningRepository:
    """In-memory PlanningRepositoryProtocol implementation for tests.

    Facts are keyed by (store_id, sku_id, week); SKU master data lives in
    ``skus`` as (label, price, cost).
    """

    def __init__(self) -> None:
        self.stores: set[str] = set()
        self.skus: dict[str, tuple[str, Decimal, Decimal]] = {}
        self.calendar: list[CalendarWeek] = generate_retail_calendar()
        self.facts: dict[tuple[str, str, str], int] = {}
        self.upsert_calls: list[list[dict[str, Any]]] = []

    def add_sku(self, sku_id: str, label: str, price: str, cost: str) -> None:
        self.skus[sku_id] = (label, Decimal(price), Decimal(cost))

    async def fetch_store_rows(self, db: Any, store_id: str) -> list[PlanningRow]:
        seq = {w.week: w.seq_no for w in self.calendar}
        month = {w.week: w.month for w in self.calendar}
        keys = sorted(
            (k for k in self.facts if k[0] == store_id),
            key=lambda k: (seq.get(k[2], 0), k[1]),
        )
        rows: list[PlanningRow] = []
        for _, sku_id, week in keys:
            label, price, cost = self.skus[sku_id]
            rows.append(
                PlanningRow(
                    sku_id=sku_id,
                    sku_label=label,
                    price=price,
                    cost=cost,
                    week=week,
                    month=month.get(week),
                    sales_units=self.facts[(store_id, sku_id, week)],
                )
            )
        return rows

    async def resolve_store_ids(self, db: Any, store_ids: set[str]) -> set[str]:
        return store_ids & self.stores

    async def resolve_sku_ids(self, db: Any, sku_ids: set[str]) -> set[str]:
        return sku_ids & set(self.skus)

    async def resolve_weeks(self, db: Any, weeks: set[str]) -> set[str]:
        return weeks & {w.week for w in self.calendar}

    async def upsert_facts(self, db: Any, rows: list[dict[str, Any]]) -> int:
        self.upsert_calls.append(rows)
        for row in rows:
            self.facts[(row["store_id"], row["sku_id"], row["week"])] = row["sales_units"]
        return len(rows)


class StaticCalendarRepository:
    """Calendar repository returning the generated calendar rows."""

    async def list_weeks(self, db: Any) -> list[CalendarWeek]:
        return generate_retail_calendar()

    async def insert_missing(self, db: Any, rows: list[dict[str, Any]]) -> int:
        return 0


@pytest.fixture
def repository() -> InMemoryPlanningRepository:
    """Repository with one store (ST001) and two SKUs sharing a label."""
    repo = InMemoryPlanningRepository()
    repo.stores.add("ST001")
    repo.add_sku("SK001", "Basic Tee", "5.00", "3.00")
    repo.add_sku("SK002", "Basic Tee", "10.00", "4.00")
    return repo


@pytest.fixture
def service(repository: InMemoryPlanningRepository) -> PlanningService:
    """PlanningService backed by in-memory repositories."""
    return PlanningService(
        repository=repository,
        calendar_service=CalendarService(repository=StaticCalendarRepository()),
    )


@pytest.fixture
def mock_session() -> AsyncMock:
    """Stand-in for AsyncSession."""
    return AsyncMock()


@pytest.fixture
def make_row():
    """Factory for PlanningRow with sensible defaults."""

    def _make(
        sku_id: str = "SK001",
        week: str = "W01",
        sales_units: int = 10,
        price: str = "5.00",
        cost: str = "3.00",
        label: str | None = None,
    ) -> PlanningRow:
        return PlanningRow(
            sku_id=sku_id,
            sku_label=label or f"Label {sku_id}",
            price=Decimal(price),
            cost=Decimal(cost),
            week=week,
            month=None,
            sales_units=sales_units,
        )

    return _make


@pytest.fixture
async def client(service: PlanningService) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the in-memory planning service."""

    async def override_get_db() -> AsyncGenerator[AsyncMock, None]:
        yield AsyncMock()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_planning_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
