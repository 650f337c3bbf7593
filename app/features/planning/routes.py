"""API routes for store planning views and fact ingest."""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import DatabaseError
from app.core.logging import get_logger
from app.features.planning.schemas import (
    MonthlyMetricsResponse,
    PlanningAggregateResponse,
    PlanningFactIngestRequest,
    PlanningFactIngestResponse,
    SkuPlanningDetailResponse,
    WeeklyMetricsResponse,
)
from app.features.planning.service import PlanningService, get_planning_service

logger = get_logger(__name__)

router = APIRouter(prefix="/planning", tags=["planning"])


def _database_error(event: str, message: str, e: SQLAlchemyError, **context: str) -> DatabaseError:
    logger.error(
        event,
        error=str(e),
        error_type=type(e).__name__,
        exc_info=True,
        **context,
    )
    return DatabaseError(message=message, details={"error": str(e), **context})


# Declared before the /{store_id} routes so "facts" is never read as a store id
@router.post(
    "/facts",
    response_model=PlanningFactIngestResponse,
    summary="Upsert planning facts",
    description="""
Insert or update planned sales units on the (store_id, sku_id, week) grain.

**Idempotency:** re-sending the same records updates the existing rows.

**All-or-nothing:** if any record names an unknown store, SKU, or calendar
week, the request fails with 422 and a field-level `errors` list, and no
record is written.
""",
)
async def ingest_planning_facts(
    request: PlanningFactIngestRequest,
    db: AsyncSession = Depends(get_db),
    service: PlanningService = Depends(get_planning_service),
) -> PlanningFactIngestResponse:
    """Upsert planning facts.

    Args:
        request: Batch of planning facts.
        db: Database session.
        service: Planning service.

    Returns:
        Upsert counts.
    """
    logger.info("planning.facts_request_received", record_count=len(request.records))

    try:
        return await service.upsert_planning_facts(db, request.records)
    except SQLAlchemyError as e:
        raise _database_error(
            "planning.facts_request_failed", "Failed to upsert planning facts", e
        ) from e


@router.get(
    "/{store_id}",
    response_model=PlanningAggregateResponse,
    summary="Get store planning data by SKU",
    description="""
Planned weekly units of a store, grouped by SKU id.

Each SKU carries its label, price, cost, and week-ordered sales data.
Weeks without a plan are omitted here; the metrics endpoints zero-fill.
An unknown store returns an empty `skus` mapping.
""",
)
async def get_planning(
    store_id: str,
    db: AsyncSession = Depends(get_db),
    service: PlanningService = Depends(get_planning_service),
) -> PlanningAggregateResponse:
    """Get planning data for a store.

    Args:
        store_id: Store identifier.
        db: Database session.
        service: Planning service.

    Returns:
        Per-SKU planning data.
    """
    try:
        return await service.get_planning_aggregate(db, store_id)
    except SQLAlchemyError as e:
        raise _database_error(
            "planning.aggregate_request_failed",
            "Failed to load planning data",
            e,
            store_id=store_id,
        ) from e


@router.get(
    "/{store_id}/metrics/weekly",
    response_model=WeeklyMetricsResponse,
    summary="Get weekly gross margin for a store",
    description="""
Revenue, cost, GM dollars, and GM percent for each of weeks W01-W52,
summed across all SKUs of the store.

- Weeks with no planning data report 0 for every figure
- GM percent is 0 where revenue is 0
- Values are unrounded floats
""",
)
async def get_weekly_metrics(
    store_id: str,
    db: AsyncSession = Depends(get_db),
    service: PlanningService = Depends(get_planning_service),
) -> WeeklyMetricsResponse:
    """Get the weekly gross-margin roll-up for a store.

    Args:
        store_id: Store identifier.
        db: Database session.
        service: Planning service.

    Returns:
        Weekly financial series.
    """
    try:
        return await service.get_weekly_metrics(db, store_id)
    except SQLAlchemyError as e:
        raise _database_error(
            "planning.weekly_metrics_request_failed",
            "Failed to compute weekly metrics",
            e,
            store_id=store_id,
        ) from e


@router.get(
    "/{store_id}/metrics/monthly",
    response_model=MonthlyMetricsResponse,
    summary="Get monthly gross margin for a store",
)
async def get_monthly_metrics(
    store_id: str,
    db: AsyncSession = Depends(get_db),
    service: PlanningService = Depends(get_planning_service),
) -> MonthlyMetricsResponse:
    """Get the fiscal-month gross-margin roll-up for a store."""
    try:
        return await service.get_monthly_metrics(db, store_id)
    except SQLAlchemyError as e:
        raise _database_error(
            "planning.monthly_metrics_request_failed",
            "Failed to compute monthly metrics",
            e,
            store_id=store_id,
        ) from e


@router.get(
    "/{store_id}/skus/{sku_id}",
    response_model=SkuPlanningDetailResponse,
    summary="Get one SKU's planning grid",
    description="Week-by-week units, revenue, cost, and margin for one SKU at "
    "one store. Returns 404 when the store has no planning data for the SKU.",
)
async def get_sku_planning(
    store_id: str,
    sku_id: str,
    db: AsyncSession = Depends(get_db),
    service: PlanningService = Depends(get_planning_service),
) -> SkuPlanningDetailResponse:
    """Get planning detail for one SKU.

    Args:
        store_id: Store identifier.
        sku_id: SKU identifier.
        db: Database session.
        service: Planning service.

    Returns:
        SKU planning grid.
    """
    try:
        return await service.get_sku_planning(db, store_id, sku_id)
    except SQLAlchemyError as e:
        raise _database_error(
            "planning.sku_request_failed",
            "Failed to load SKU planning data",
            e,
            store_id=store_id,
            sku_id=sku_id,
        ) from e
