"""Datastore access for Store and SKU dimension records."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.data_platform.models import Sku, Store


@runtime_checkable
class DimensionRepositoryProtocol(Protocol):
    """Protocol for Store/SKU persistence, injected into DimensionService."""

    async def list_stores(self, db: AsyncSession) -> list[Store]:
        """Return all stores ordered by id."""
        ...

    async def get_store(self, db: AsyncSession, store_id: str) -> Store | None:
        """Return one store or None."""
        ...

    async def add_store(self, db: AsyncSession, store: Store) -> Store:
        """Insert a store and return it with server defaults loaded."""
        ...

    async def delete_store(self, db: AsyncSession, store_id: str) -> bool:
        """Delete a store, returning False if it did not exist."""
        ...

    async def list_skus(self, db: AsyncSession) -> list[Sku]:
        """Return all SKUs ordered by id."""
        ...

    async def get_sku(self, db: AsyncSession, sku_id: str) -> Sku | None:
        """Return one SKU or None."""
        ...

    async def add_sku(self, db: AsyncSession, sku: Sku) -> Sku:
        """Insert a SKU and return it with server defaults loaded."""
        ...

    async def delete_sku(self, db: AsyncSession, sku_id: str) -> bool:
        """Delete a SKU, returning False if it did not exist."""
        ...


class SqlDimensionRepository:
    """SQLAlchemy implementation of DimensionRepositoryProtocol.

    Writes are flushed immediately so constraint violations surface inside
    the calling service rather than at request teardown.
    """

    async def list_stores(self, db: AsyncSession) -> list[Store]:
        result = await db.execute(select(Store).order_by(Store.id))
        return list(result.scalars().all())

    async def get_store(self, db: AsyncSession, store_id: str) -> Store | None:
        result = await db.execute(select(Store).where(Store.id == store_id))
        return result.scalar_one_or_none()

    async def add_store(self, db: AsyncSession, store: Store) -> Store:
        db.add(store)
        await db.flush()
        await db.refresh(store)
        return store

    async def delete_store(self, db: AsyncSession, store_id: str) -> bool:
        result = await db.execute(delete(Store).where(Store.id == store_id))
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def list_skus(self, db: AsyncSession) -> list[Sku]:
        result = await db.execute(select(Sku).order_by(Sku.id))
        return list(result.scalars().all())

    async def get_sku(self, db: AsyncSession, sku_id: str) -> Sku | None:
        result = await db.execute(select(Sku).where(Sku.id == sku_id))
        return result.scalar_one_or_none()

    async def add_sku(self, db: AsyncSession, sku: Sku) -> Sku:
        db.add(sku)
        await db.flush()
        await db.refresh(sku)
        return sku

    async def delete_sku(self, db: AsyncSession, sku_id: str) -> bool:
        result = await db.execute(delete(Sku).where(Sku.id == sku_id))
        return bool(result.rowcount)  # type: ignore[attr-defined]
