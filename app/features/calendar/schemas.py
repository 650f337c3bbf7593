"""Pydantic schemas for calendar endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class CalendarWeekResponse(BaseModel):
    """One week of the planning calendar."""

    model_config = ConfigDict(from_attributes=True)

    seq_no: int = Field(..., ge=1, description="Position in the planning year (1-52).")
    week: str = Field(..., description="Week token used by planning facts (e.g., 'W01').")
    week_label: str = Field(..., description="Display label (e.g., 'Week 01').")
    month: str = Field(..., description="Fiscal month token (e.g., 'M01').")
    month_label: str = Field(..., description="Month display label (e.g., 'Feb').")


class CalendarResponse(BaseModel):
    """The stored planning calendar ordered by seq_no."""

    weeks: list[CalendarWeekResponse] = Field(..., description="Calendar weeks.")
    total: int = Field(..., ge=0, description="Number of weeks stored.")


class CalendarSeedResponse(BaseModel):
    """Result of seeding the planning calendar."""

    inserted_count: int = Field(..., ge=0, description="Weeks inserted by this call.")
    existing_count: int = Field(
        ...,
        ge=0,
        description="Weeks that were already present and left untouched.",
    )
