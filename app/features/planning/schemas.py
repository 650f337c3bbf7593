"""Pydantic schemas for planning endpoints.

All money fields are floats (IEEE double) and are not rounded. Clients
round for display.
"""

from pydantic import BaseModel, ConfigDict, Field

# Largest value of the int4 sales_units column
SALES_UNITS_MAX = 2**31 - 1

# =============================================================================
# Planning Aggregate
# =============================================================================


class WeeklySalesResponse(BaseModel):
    """Planned units for one week."""

    model_config = ConfigDict(from_attributes=True)

    week: str = Field(..., description="Week token (e.g., 'W01').")
    sales_units: int = Field(..., ge=0, description="Planned units sold.")


class SkuPlanningResponse(BaseModel):
    """One SKU's planned weeks at a store."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="SKU identifier.")
    label: str = Field(..., description="SKU display name.")
    price: float = Field(..., ge=0, description="Retail price per unit.")
    cost: float = Field(..., ge=0, description="Cost per unit.")
    sales_data: list[WeeklySalesResponse] = Field(
        ...,
        description="Planned units ordered by week. Weeks without a plan are omitted.",
    )


class PlanningAggregateResponse(BaseModel):
    """Planning data of a store grouped by SKU id."""

    store_id: str = Field(..., description="Store identifier.")
    skus: dict[str, SkuPlanningResponse] = Field(
        ...,
        description="Planned weeks keyed by SKU id. Empty for unknown stores "
        "or stores without planning data.",
    )


# =============================================================================
# Metrics
# =============================================================================


class WeeklyMetricsResponse(BaseModel):
    """52-week gross margin roll-up of a store across all SKUs.

    All lists are parallel to 'weeks'.
    """

    store_id: str = Field(..., description="Store identifier.")
    weeks: list[str] = Field(..., description="Canonical week tokens W01..W52.")
    revenue: list[float] = Field(..., description="Revenue per week.")
    cost: list[float] = Field(..., description="Cost per week.")
    gm_dollars: list[float] = Field(..., description="Gross margin dollars per week.")
    gm_percent: list[float] = Field(
        ...,
        description="Gross margin percent per week (0 when revenue is 0).",
    )


class MonthlyMetricsResponse(BaseModel):
    """Fiscal-month gross margin roll-up of a store.

    All lists are parallel to 'months'.
    """

    store_id: str = Field(..., description="Store identifier.")
    months: list[str] = Field(..., description="Fiscal month tokens in calendar order.")
    month_labels: list[str] = Field(..., description="Month display labels.")
    revenue: list[float] = Field(..., description="Revenue per month.")
    cost: list[float] = Field(..., description="Cost per month.")
    gm_dollars: list[float] = Field(..., description="Gross margin dollars per month.")
    gm_percent: list[float] = Field(
        ...,
        description="Gross margin percent per month, from monthly sums (0 when revenue is 0).",
    )


class SkuWeekDetailResponse(BaseModel):
    """Financials of one SKU in one week."""

    model_config = ConfigDict(from_attributes=True)

    week: str
    sales_units: int
    revenue: float
    cost: float
    gm_dollars: float
    gm_percent: float


class SkuPlanningDetailResponse(BaseModel):
    """Planning grid of one SKU at one store."""

    store_id: str = Field(..., description="Store identifier.")
    sku_id: str = Field(..., description="SKU identifier.")
    label: str = Field(..., description="SKU display name.")
    price: float = Field(..., description="Retail price per unit.")
    cost: float = Field(..., description="Cost per unit.")
    weeks: list[SkuWeekDetailResponse] = Field(..., description="Planned weeks in order.")


# =============================================================================
# Fact Ingest
# =============================================================================


class PlanningFactRow(BaseModel):
    """Single planning fact in an ingest payload."""

    model_config = ConfigDict(str_strip_whitespace=True)

    store_id: str = Field(..., min_length=1, max_length=20, description="Store identifier.")
    sku_id: str = Field(..., min_length=1, max_length=20, description="SKU identifier.")
    week: str = Field(..., min_length=1, max_length=3, description="Week token (e.g., 'W01').")
    sales_units: int = Field(
        ...,
        ge=0,
        le=SALES_UNITS_MAX,
        description="Planned units sold (non-negative, fits a 32-bit integer).",
    )


class PlanningFactIngestRequest(BaseModel):
    """Request body for POST /planning/facts."""

    records: list[PlanningFactRow] = Field(
        ...,
        min_length=1,
        description="Planning facts to upsert.",
    )


class PlanningFactIngestResponse(BaseModel):
    """Response body for POST /planning/facts."""

    upserted_count: int = Field(..., ge=0, description="Rows inserted or updated.")
    total_processed: int = Field(..., ge=0, description="Records received.")
    duplicate_count: int = Field(
        ...,
        ge=0,
        description="Records superseded by a later record with the same grain.",
    )
    duration_ms: float = Field(..., ge=0, description="Processing duration in milliseconds.")
