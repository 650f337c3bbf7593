"""Planning aggregation and gross-margin roll-up.

Two pure steps turn flat planning join rows into chartable figures:

1. ``group_planning_rows``: rows -> {sku_id: SkuPlanningAggregate}, one
   record per SKU with its week-ordered sales units. Keyed by SKU id, never
   by label, so two SKUs sharing a label stay separate.
2. ``roll_up_weekly_metrics``: the grouped records -> revenue, cost,
   gross-margin dollars, and gross-margin percent for each of the 52
   canonical weeks, zero-filled where no planning row exists.

Numeric contract: all money is IEEE double (``float``) with no rounding.
Round only for display.

CRITICAL: GM% is computed once per bucket after all SKUs are accumulated.
Per-SKU percentages are never summed or averaged.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import numpy as np

from app.features.calendar.generator import CalendarWeek, canonical_weeks

FloatArray = np.ndarray[Any, np.dtype[np.float64]]


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class PlanningRow:
    """One planning fact joined with its SKU and calendar week.

    Attributes:
        sku_id: SKU identifier.
        sku_label: SKU display name.
        price: SKU retail price per unit.
        cost: SKU cost per unit.
        week: Week token (e.g., 'W01').
        month: Fiscal month token of the week (None when unknown).
        sales_units: Planned units sold.
    """

    sku_id: str
    sku_label: str
    price: Decimal | float
    cost: Decimal | float
    week: str
    month: str | None
    sales_units: int


@dataclass(frozen=True)
class WeeklySales:
    """Planned units for one SKU in one week."""

    week: str
    sales_units: int


@dataclass
class SkuPlanningAggregate:
    """All planned weeks of one SKU at one store.

    Attributes:
        id: SKU identifier.
        label: SKU display name.
        price: Retail price per unit.
        cost: Cost per unit.
        sales_data: Week-ordered planned units.
    """

    id: str
    label: str
    price: float
    cost: float
    sales_data: list[WeeklySales] = field(default_factory=lambda: [])


@dataclass
class MarginSeries:
    """Parallel per-bucket financial sequences.

    Attributes:
        buckets: Bucket tokens (weeks or months) in timeline order.
        revenue: Revenue per bucket.
        cost: Cost per bucket.
        gm_dollars: Gross margin dollars per bucket.
        gm_percent: Gross margin percent per bucket (0 when revenue is 0).
        dropped_records: Sales records whose week was not on the timeline.
    """

    buckets: list[str]
    revenue: list[float]
    cost: list[float]
    gm_dollars: list[float]
    gm_percent: list[float]
    dropped_records: int = 0


@dataclass(frozen=True)
class SkuWeekDetail:
    """Financials for one SKU in one week."""

    week: str
    sales_units: int
    revenue: float
    cost: float
    gm_dollars: float
    gm_percent: float


# =============================================================================
# Planning Aggregator
# =============================================================================


def group_planning_rows(rows: Iterable[PlanningRow]) -> dict[str, SkuPlanningAggregate]:
    """Group flat planning rows into one record per SKU.

    Input order is preserved, both for SKUs (first appearance) and for each
    SKU's sales records, so week-ordered rows yield week-ordered sales data.
    SKUs without rows are absent; zero-filling happens in the roll-up.

    Args:
        rows: Planning rows for a single store.

    Returns:
        Mapping of SKU id to its aggregate record.
    """
    grouped: dict[str, SkuPlanningAggregate] = {}
    for row in rows:
        record = grouped.get(row.sku_id)
        if record is None:
            record = SkuPlanningAggregate(
                id=row.sku_id,
                label=row.sku_label,
                price=float(row.price),
                cost=float(row.cost),
            )
            grouped[row.sku_id] = record
        record.sales_data.append(WeeklySales(week=row.week, sales_units=row.sales_units))
    return grouped


# =============================================================================
# Metrics Roll-up
# =============================================================================


def gm_percent(gm_dollars: FloatArray, revenue: FloatArray) -> FloatArray:
    """Gross margin percent per bucket, exactly 0.0 where revenue is 0.

    Args:
        gm_dollars: Gross margin dollars per bucket.
        revenue: Revenue per bucket.

    Returns:
        gm_dollars / revenue * 100, with zero-revenue buckets set to 0.
    """
    ratio = np.divide(
        gm_dollars,
        revenue,
        out=np.zeros_like(gm_dollars, dtype=np.float64),
        where=revenue > 0,
    )
    return ratio * 100.0


def _series(
    buckets: list[str],
    revenue: FloatArray,
    cost: FloatArray,
    gm: FloatArray,
    dropped: int = 0,
) -> MarginSeries:
    return MarginSeries(
        buckets=buckets,
        revenue=[float(v) for v in revenue],
        cost=[float(v) for v in cost],
        gm_dollars=[float(v) for v in gm],
        gm_percent=[float(v) for v in gm_percent(gm, revenue)],
        dropped_records=dropped,
    )


def roll_up_weekly_metrics(
    aggregate: Mapping[str, SkuPlanningAggregate],
    weeks: Sequence[str] | None = None,
) -> MarginSeries:
    """Roll per-SKU planned units up into weekly store financials.

    Weeks are matched by token only. Records whose week is not on the
    timeline are skipped and counted in ``dropped_records``.

    Args:
        aggregate: Output of ``group_planning_rows``.
        weeks: Week timeline (defaults to the 52 canonical weeks).

    Returns:
        Weekly revenue, cost, GM dollars, and GM percent.
    """
    timeline = list(weeks) if weeks is not None else canonical_weeks()
    index = {week: i for i, week in enumerate(timeline)}

    revenue = np.zeros(len(timeline), dtype=np.float64)
    cost = np.zeros(len(timeline), dtype=np.float64)
    gm = np.zeros(len(timeline), dtype=np.float64)
    dropped = 0

    for sku in aggregate.values():
        for record in sku.sales_data:
            i = index.get(record.week)
            if i is None:
                dropped += 1
                continue
            revenue_contribution = record.sales_units * sku.price
            cost_contribution = record.sales_units * sku.cost
            revenue[i] += revenue_contribution
            cost[i] += cost_contribution
            gm[i] += revenue_contribution - cost_contribution

    return _series(timeline, revenue, cost, gm, dropped)


def roll_up_monthly_metrics(
    weekly: MarginSeries,
    calendar: Sequence[CalendarWeek],
) -> tuple[MarginSeries, list[str]]:
    """Re-bucket weekly financials into fiscal months.

    Months appear in calendar order. Weeks missing from the calendar are
    not counted. GM percent is recomputed from the monthly sums.

    Args:
        weekly: Output of ``roll_up_weekly_metrics``.
        calendar: Calendar weeks in seq_no order.

    Returns:
        Monthly series and the month display labels (parallel to buckets).
    """
    months: list[str] = []
    labels: list[str] = []
    week_to_month: dict[str, int] = {}
    for week in calendar:
        if week.month not in months:
            months.append(week.month)
            labels.append(week.month_label)
        week_to_month[week.week] = months.index(week.month)

    revenue = np.zeros(len(months), dtype=np.float64)
    cost = np.zeros(len(months), dtype=np.float64)
    gm = np.zeros(len(months), dtype=np.float64)

    for i, week in enumerate(weekly.buckets):
        m = week_to_month.get(week)
        if m is None:
            continue
        revenue[m] += weekly.revenue[i]
        cost[m] += weekly.cost[i]
        gm[m] += weekly.gm_dollars[i]

    return _series(months, revenue, cost, gm, weekly.dropped_records), labels


def sku_weekly_detail(sku: SkuPlanningAggregate) -> list[SkuWeekDetail]:
    """Per-week financials for a single SKU, in its sales-data order.

    Args:
        sku: One SKU aggregate.

    Returns:
        One detail row per planned week.
    """
    details: list[SkuWeekDetail] = []
    for record in sku.sales_data:
        revenue = record.sales_units * sku.price
        cost = record.sales_units * sku.cost
        gm = revenue - cost
        details.append(
            SkuWeekDetail(
                week=record.week,
                sales_units=record.sales_units,
                revenue=revenue,
                cost=cost,
                gm_dollars=gm,
                gm_percent=gm / revenue * 100.0 if revenue > 0 else 0.0,
            )
        )
    return details
