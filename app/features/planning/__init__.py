"""Store planning: per-SKU aggregates, gross-margin roll-ups, and fact ingest."""

from app.features.planning.aggregation import (
    MarginSeries,
    PlanningRow,
    SkuPlanningAggregate,
    group_planning_rows,
    roll_up_monthly_metrics,
    roll_up_weekly_metrics,
)
from app.features.planning.routes import router
from app.features.planning.service import PlanningService

__all__ = [
    "MarginSeries",
    "PlanningRow",
    "PlanningService",
    "SkuPlanningAggregate",
    "group_planning_rows",
    "roll_up_monthly_metrics",
    "roll_up_weekly_metrics",
    "router",
]
