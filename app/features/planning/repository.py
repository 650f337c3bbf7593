"""Datastore access for planning facts."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.data_platform.models import Calendar, Planning, Sku, Store
from app.features.planning.aggregation import PlanningRow


@runtime_checkable
class PlanningRepositoryProtocol(Protocol):
    """Protocol for planning persistence, injected into PlanningService."""

    async def fetch_store_rows(self, db: AsyncSession, store_id: str) -> list[PlanningRow]:
        """Planning facts of one store joined with SKU and calendar, week ascending."""
        ...

    async def resolve_store_ids(self, db: AsyncSession, store_ids: set[str]) -> set[str]:
        """Return the subset of store ids that exist."""
        ...

    async def resolve_sku_ids(self, db: AsyncSession, sku_ids: set[str]) -> set[str]:
        """Return the subset of SKU ids that exist."""
        ...

    async def resolve_weeks(self, db: AsyncSession, weeks: set[str]) -> set[str]:
        """Return the subset of week tokens present in the calendar."""
        ...

    async def upsert_facts(self, db: AsyncSession, rows: list[dict[str, Any]]) -> int:
        """Insert or update facts on the (store, sku, week) grain; return rows written."""
        ...


class SqlPlanningRepository:
    """SQLAlchemy implementation of PlanningRepositoryProtocol."""

    async def fetch_store_rows(self, db: AsyncSession, store_id: str) -> list[PlanningRow]:
        """Fetch all planning facts for a store.

        An unknown store yields no rows.

        Args:
            db: Async database session.
            store_id: Store identifier.

        Returns:
            Join rows ordered by calendar position, then SKU id.
        """
        stmt = (
            select(
                Sku.id.label("sku_id"),
                Sku.label.label("sku_label"),
                Sku.price,
                Sku.cost,
                Calendar.week,
                Calendar.month,
                Planning.sales_units,
            )
            .select_from(Planning)
            .join(Sku, Planning.sku_id == Sku.id)
            .join(Calendar, Planning.week == Calendar.week)
            .where(Planning.store_id == store_id)
            .order_by(Calendar.seq_no, Sku.id)
        )
        result = await db.execute(stmt)
        return [
            PlanningRow(
                sku_id=row.sku_id,
                sku_label=row.sku_label,
                price=row.price,
                cost=row.cost,
                week=row.week,
                month=row.month,
                sales_units=row.sales_units,
            )
            for row in result
        ]

    async def resolve_store_ids(self, db: AsyncSession, store_ids: set[str]) -> set[str]:
        if not store_ids:
            return set()

        result = await db.execute(select(Store.id).where(Store.id.in_(store_ids)))
        return {row.id for row in result}

    async def resolve_sku_ids(self, db: AsyncSession, sku_ids: set[str]) -> set[str]:
        if not sku_ids:
            return set()

        result = await db.execute(select(Sku.id).where(Sku.id.in_(sku_ids)))
        return {row.id for row in result}

    async def resolve_weeks(self, db: AsyncSession, weeks: set[str]) -> set[str]:
        if not weeks:
            return set()

        result = await db.execute(select(Calendar.week).where(Calendar.week.in_(weeks)))
        return {row.week for row in result}

    async def upsert_facts(self, db: AsyncSession, rows: list[dict[str, Any]]) -> int:
        """Upsert planning facts with PostgreSQL ON CONFLICT DO UPDATE.

        Args:
            db: Async database session.
            rows: Column mappings with store_id, sku_id, week, sales_units.
                Must not contain the same grain twice.

        Returns:
            Number of rows inserted or updated.
        """
        if not rows:
            return 0

        insert_stmt = pg_insert(Planning).values(rows)
        upsert_stmt = insert_stmt.on_conflict_do_update(
            index_elements=["store_id", "sku_id", "week"],
            set_={
                "sales_units": insert_stmt.excluded.sales_units,
                **Planning.touch_values(),
            },
        ).returning(Planning.id)

        result = await db.execute(upsert_stmt)
        return len(result.fetchall())
