"""Fixtures for data platform integration tests.

The db_session fixture is local to this package because pytest only discovers
conftest.py files along the test's directory path.
"""

from decimal import Decimal

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings
from app.features.data_platform.models import Calendar, Planning, Sku, Store


@pytest.fixture
async def db_session():
    """Create async database session for integration tests.

    Uses existing tables from migrations. Cleans up test data after each test.
    Requires PostgreSQL to be running and migrations applied.
    """
    settings = get_settings()
    engine = create_async_engine(settings.database_url, echo=False)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()

    # Fresh session for cleanup (FK order: facts first)
    async with async_session_maker() as cleanup_session:
        try:
            await cleanup_session.execute(delete(Planning).where(Planning.store_id.like("STTEST%")))
            await cleanup_session.execute(delete(Sku).where(Sku.id.like("SKTEST%")))
            await cleanup_session.execute(delete(Store).where(Store.id.like("STTEST%")))
            await cleanup_session.execute(delete(Calendar).where(Calendar.seq_no >= 900))
            await cleanup_session.commit()
        except SQLAlchemyError:
            await cleanup_session.rollback()

    await engine.dispose()


@pytest.fixture
async def sample_store(db_session: AsyncSession) -> Store:
    """Create a sample store for testing."""
    store = Store(id="STTEST01", label="Test Store", city="Austin", state="TX")
    db_session.add(store)
    await db_session.commit()
    await db_session.refresh(store)
    return store


@pytest.fixture
async def sample_sku(db_session: AsyncSession) -> Sku:
    """Create a sample SKU for testing."""
    sku = Sku(
        id="SKTEST01",
        label="Test Tee",
        sku_class="Tops",
        department="Men's Apparel",
        price=Decimal("19.99"),
        cost=Decimal("9.99"),
    )
    db_session.add(sku)
    await db_session.commit()
    await db_session.refresh(sku)
    return sku


@pytest.fixture
async def sample_calendar(db_session: AsyncSession) -> Calendar:
    """Create a sample calendar week outside the real 1-52 range."""
    calendar = Calendar(
        seq_no=901,
        week="T01",
        week_label="Test Week 01",
        month="T01",
        month_label="Test",
    )
    db_session.add(calendar)
    await db_session.commit()
    await db_session.refresh(calendar)
    return calendar
