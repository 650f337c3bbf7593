"""Service layer for store planning views and fact ingest."""

from __future__ import annotations

import time
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import get_logger
from app.features.calendar.service import CalendarService
from app.features.planning.aggregation import (
    SkuPlanningAggregate,
    group_planning_rows,
    roll_up_monthly_metrics,
    roll_up_weekly_metrics,
    sku_weekly_detail,
)
from app.features.planning.repository import (
    PlanningRepositoryProtocol,
    SqlPlanningRepository,
)
from app.features.planning.schemas import (
    MonthlyMetricsResponse,
    PlanningAggregateResponse,
    PlanningFactIngestResponse,
    PlanningFactRow,
    SkuPlanningDetailResponse,
    SkuPlanningResponse,
    SkuWeekDetailResponse,
    WeeklyMetricsResponse,
    WeeklySalesResponse,
)

logger = get_logger(__name__)


def _sku_response(sku: SkuPlanningAggregate) -> SkuPlanningResponse:
    return SkuPlanningResponse(
        id=sku.id,
        label=sku.label,
        price=sku.price,
        cost=sku.cost,
        sales_data=[
            WeeklySalesResponse(week=s.week, sales_units=s.sales_units) for s in sku.sales_data
        ],
    )


class PlanningService:
    """Builds per-store planning aggregates and gross-margin roll-ups.

    Reads go through the injected repository; nothing is cached between
    requests, so every call reflects the current datastore contents.
    """

    def __init__(
        self,
        repository: PlanningRepositoryProtocol | None = None,
        calendar_service: CalendarService | None = None,
    ) -> None:
        """Initialize planning service.

        Args:
            repository: Planning repository (defaults to SQLAlchemy).
            calendar_service: Calendar lookup for month roll-ups.
        """
        self.settings = get_settings()
        self.repository = repository or SqlPlanningRepository()
        self.calendar_service = calendar_service or CalendarService()

    async def _load_aggregate(
        self, db: AsyncSession, store_id: str
    ) -> dict[str, SkuPlanningAggregate]:
        rows = await self.repository.fetch_store_rows(db, store_id)
        return group_planning_rows(rows)

    async def get_planning_aggregate(
        self, db: AsyncSession, store_id: str
    ) -> PlanningAggregateResponse:
        """Planning data of a store grouped by SKU id.

        An unknown store, or one with no planning rows, yields an empty
        mapping rather than an error.

        Args:
            db: Database session.
            store_id: Store identifier.

        Returns:
            Per-SKU planned weeks.
        """
        aggregate = await self._load_aggregate(db, store_id)

        logger.info(
            "planning.aggregate_built",
            store_id=store_id,
            sku_count=len(aggregate),
        )

        return PlanningAggregateResponse(
            store_id=store_id,
            skus={sku_id: _sku_response(sku) for sku_id, sku in aggregate.items()},
        )

    async def get_weekly_metrics(self, db: AsyncSession, store_id: str) -> WeeklyMetricsResponse:
        """52-week revenue, cost, GM dollars, and GM percent for a store.

        Args:
            db: Database session.
            store_id: Store identifier.

        Returns:
            Weekly series aligned to W01..W52, zero-filled.
        """
        aggregate = await self._load_aggregate(db, store_id)
        series = roll_up_weekly_metrics(aggregate)

        if series.dropped_records:
            logger.warning(
                "planning.unknown_weeks_dropped",
                store_id=store_id,
                dropped_records=series.dropped_records,
            )

        logger.info(
            "planning.weekly_metrics_built",
            store_id=store_id,
            sku_count=len(aggregate),
        )

        return WeeklyMetricsResponse(
            store_id=store_id,
            weeks=series.buckets,
            revenue=series.revenue,
            cost=series.cost,
            gm_dollars=series.gm_dollars,
            gm_percent=series.gm_percent,
        )

    async def get_monthly_metrics(
        self, db: AsyncSession, store_id: str
    ) -> MonthlyMetricsResponse:
        """Fiscal-month gross-margin roll-up for a store.

        Args:
            db: Database session.
            store_id: Store identifier.

        Returns:
            Monthly series in calendar order.
        """
        aggregate = await self._load_aggregate(db, store_id)
        calendar = await self.calendar_service.get_calendar_weeks(db)

        weekly = roll_up_weekly_metrics(aggregate)
        monthly, labels = roll_up_monthly_metrics(weekly, calendar)

        logger.info(
            "planning.monthly_metrics_built",
            store_id=store_id,
            month_count=len(monthly.buckets),
        )

        return MonthlyMetricsResponse(
            store_id=store_id,
            months=monthly.buckets,
            month_labels=labels,
            revenue=monthly.revenue,
            cost=monthly.cost,
            gm_dollars=monthly.gm_dollars,
            gm_percent=monthly.gm_percent,
        )

    async def get_sku_planning(
        self, db: AsyncSession, store_id: str, sku_id: str
    ) -> SkuPlanningDetailResponse:
        """Week-by-week financials of one SKU at one store.

        Args:
            db: Database session.
            store_id: Store identifier.
            sku_id: SKU identifier.

        Returns:
            Planned weeks with revenue, cost, and margin.

        Raises:
            NotFoundError: If the store has no planning data for the SKU.
        """
        aggregate = await self._load_aggregate(db, store_id)
        sku = aggregate.get(sku_id)
        if sku is None:
            raise NotFoundError(
                message=f"No planning data for SKU {sku_id} at store {store_id}",
                details={"store_id": store_id, "sku_id": sku_id},
            )

        return SkuPlanningDetailResponse(
            store_id=store_id,
            sku_id=sku.id,
            label=sku.label,
            price=sku.price,
            cost=sku.cost,
            weeks=[SkuWeekDetailResponse.model_validate(d) for d in sku_weekly_detail(sku)],
        )

    async def upsert_planning_facts(
        self, db: AsyncSession, records: list[PlanningFactRow]
    ) -> PlanningFactIngestResponse:
        """Idempotently write planning facts on the (store, sku, week) grain.

        The whole batch is rejected when any record references an unknown
        store, SKU, or week; nothing is written in that case. Records that
        repeat a grain within the batch collapse to the last one.

        Args:
            db: Database session.
            records: Planning facts.

        Returns:
            Upsert counts and duration.

        Raises:
            ValidationError: Batch too large or unknown keys.
        """
        start_time = time.perf_counter()

        max_records = self.settings.ingest_max_records
        if len(records) > max_records:
            raise ValidationError.for_field(
                "records",
                f"Batch exceeds maximum of {max_records} records",
                "too_many_records",
            )

        logger.info("planning.facts_upsert_started", batch_size=len(records))

        known_stores = await self.repository.resolve_store_ids(
            db, {r.store_id for r in records}
        )
        known_skus = await self.repository.resolve_sku_ids(db, {r.sku_id for r in records})
        known_weeks = await self.repository.resolve_weeks(db, {r.week for r in records})

        errors: list[dict[str, Any]] = []
        for idx, record in enumerate(records):
            if record.store_id not in known_stores:
                errors.append(
                    {
                        "field": f"records[{idx}].store_id",
                        "message": f"Store not found: {record.store_id}",
                        "type": "unknown_store",
                    }
                )
            if record.sku_id not in known_skus:
                errors.append(
                    {
                        "field": f"records[{idx}].sku_id",
                        "message": f"SKU not found: {record.sku_id}",
                        "type": "unknown_sku",
                    }
                )
            if record.week not in known_weeks:
                errors.append(
                    {
                        "field": f"records[{idx}].week",
                        "message": f"Week not found in calendar: {record.week}",
                        "type": "unknown_week",
                    }
                )

        if errors:
            logger.warning(
                "planning.facts_rejected",
                batch_size=len(records),
                error_count=len(errors),
            )
            raise ValidationError(
                message=f"Planning facts rejected: {len(errors)} unknown reference(s)",
                details={"error_count": len(errors)},
                errors=errors,
            )

        # Postgres refuses to touch the same conflict row twice in one statement
        rows_by_grain: dict[tuple[str, str, str], dict[str, Any]] = {}
        for record in records:
            rows_by_grain[(record.store_id, record.sku_id, record.week)] = record.model_dump()

        upserted = await self.repository.upsert_facts(db, list(rows_by_grain.values()))
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "planning.facts_upsert_completed",
            upserted=upserted,
            total=len(records),
            duration_ms=round(duration_ms, 2),
        )

        return PlanningFactIngestResponse(
            upserted_count=upserted,
            total_processed=len(records),
            duplicate_count=len(records) - len(rows_by_grain),
            duration_ms=duration_ms,
        )


def get_planning_service() -> PlanningService:
    """FastAPI dependency returning a PlanningService."""
    return PlanningService()
