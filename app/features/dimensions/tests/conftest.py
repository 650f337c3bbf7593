"""Test fixtures for dimensions module."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_db
from app.features.data_platform.models import Sku, Store
from app.features.dimensions.schemas import SkuCreate, StoreCreate
from app.features.dimensions.service import DimensionService, get_dimension_service
from app.main import app


class InMemoryDimensionRepository:
    """In-memory DimensionRepositoryProtocol implementation for tests."""

    def __init__(self) -> None:
        self.stores: dict[str, Store] = {}
        self.skus: dict[str, Sku] = {}

    async def list_stores(self, db: Any) -> list[Store]:
        return [self.stores[key] for key in sorted(self.stores)]

    async def get_store(self, db: Any, store_id: str) -> Store | None:
        return self.stores.get(store_id)

    async def add_store(self, db: Any, store: Store) -> Store:
        store.created_at = datetime.now(UTC)
        self.stores[store.id] = store
        return store

    async def delete_store(self, db: Any, store_id: str) -> bool:
        return self.stores.pop(store_id, None) is not None

    async def list_skus(self, db: Any) -> list[Sku]:
        return [self.skus[key] for key in sorted(self.skus)]

    async def get_sku(self, db: Any, sku_id: str) -> Sku | None:
        return self.skus.get(sku_id)

    async def add_sku(self, db: Any, sku: Sku) -> Sku:
        sku.created_at = datetime.now(UTC)
        self.skus[sku.id] = sku
        return sku

    async def delete_sku(self, db: Any, sku_id: str) -> bool:
        return self.skus.pop(sku_id, None) is not None


@pytest.fixture
def repository() -> InMemoryDimensionRepository:
    """Empty in-memory repository."""
    return InMemoryDimensionRepository()


@pytest.fixture
def service(repository: InMemoryDimensionRepository) -> DimensionService:
    """DimensionService backed by the in-memory repository."""
    return DimensionService(repository=repository)


@pytest.fixture
def mock_session() -> AsyncMock:
    """Stand-in for AsyncSession (the in-memory repository ignores it)."""
    return AsyncMock()


@pytest.fixture
def sample_store_data() -> dict[str, str]:
    """Sample store payload."""
    return {
        "id": "ST035",
        "label": "San Francisco Bay Trends",
        "city": "San Francisco",
        "state": "CA",
    }


@pytest.fixture
def sample_sku_data() -> dict[str, str]:
    """Sample SKU payload as sent on the wire."""
    return {
        "id": "SK00158",
        "label": "Crew Neck Merino Wool Sweater",
        "class": "Tops",
        "department": "Men's Apparel",
        "price": "114.99",
        "cost": "18.28",
    }


@pytest.fixture
def sample_store_create(sample_store_data: dict[str, str]) -> StoreCreate:
    """Valid StoreCreate."""
    return StoreCreate(**sample_store_data)


@pytest.fixture
def sample_sku_create() -> SkuCreate:
    """Valid SkuCreate."""
    return SkuCreate(
        id="SK00158",
        label="Crew Neck Merino Wool Sweater",
        sku_class="Tops",
        department="Men's Apparel",
        price=Decimal("114.99"),
        cost=Decimal("18.28"),
    )


@pytest.fixture
async def client(service: DimensionService) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the in-memory service and a mock session."""

    async def override_get_db() -> AsyncGenerator[AsyncMock, None]:
        yield AsyncMock()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dimension_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
