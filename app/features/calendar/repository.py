"""Datastore access for the planning calendar."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.data_platform.models import Calendar


@runtime_checkable
class CalendarRepositoryProtocol(Protocol):
    """Protocol for calendar persistence, injected into CalendarService."""

    async def list_weeks(self, db: AsyncSession) -> list[Calendar]:
        """Return stored weeks ordered by seq_no."""
        ...

    async def insert_missing(self, db: AsyncSession, rows: list[dict[str, Any]]) -> int:
        """Insert rows whose seq_no is not stored yet; return the inserted count."""
        ...


class SqlCalendarRepository:
    """SQLAlchemy implementation of CalendarRepositoryProtocol."""

    async def list_weeks(self, db: AsyncSession) -> list[Calendar]:
        result = await db.execute(select(Calendar).order_by(Calendar.seq_no))
        return list(result.scalars().all())

    async def insert_missing(self, db: AsyncSession, rows: list[dict[str, Any]]) -> int:
        if not rows:
            return 0

        stmt = (
            pg_insert(Calendar)
            .values(rows)
            .on_conflict_do_nothing(index_elements=["seq_no"])
            .returning(Calendar.seq_no)
        )
        result = await db.execute(stmt)
        return len(result.fetchall())
