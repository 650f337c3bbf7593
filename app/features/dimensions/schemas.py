"""Pydantic schemas for Store and SKU endpoints.

Create payloads accept missing fields so the service can report them with
the same field-level error shape as the other business rules.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# Bounds of the Numeric(10, 2) price and cost columns
MONEY_MAX_DIGITS = 10
MONEY_DECIMAL_PLACES = 2

# =============================================================================
# Store Schemas
# =============================================================================


class StoreCreate(BaseModel):
    """Request body for POST /stores."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str | None = Field(
        None,
        max_length=20,
        description="Store identifier. Must start with the store prefix (e.g., 'ST035').",
    )
    label: str | None = Field(None, max_length=100, description="Store display name.")
    city: str | None = Field(None, max_length=50, description="City where the store is located.")
    state: str | None = Field(None, max_length=20, description="State code (e.g., 'TX').")


class StoreResponse(BaseModel):
    """Store dimension record."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Store identifier (e.g., 'ST035').")
    label: str = Field(..., description="Store display name.")
    city: str = Field(..., description="City where the store is located.")
    state: str = Field(..., description="State code.")
    created_at: datetime | None = Field(
        None,
        description="Timestamp when the store record was created.",
    )


class StoreListResponse(BaseModel):
    """All stores, ordered by id."""

    stores: list[StoreResponse] = Field(..., description="Store records.")
    total: int = Field(..., ge=0, description="Number of stores returned.")


# =============================================================================
# SKU Schemas
# =============================================================================


class SkuCreate(BaseModel):
    """Request body for POST /skus.

    The merchandise class is sent as 'class' on the wire.
    """

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    id: str | None = Field(
        None,
        max_length=20,
        description="SKU identifier. Must start with the SKU prefix (e.g., 'SK00158').",
    )
    label: str | None = Field(None, max_length=200, description="Product display name.")
    sku_class: str | None = Field(
        None,
        alias="class",
        max_length=100,
        description="Merchandise class (e.g., 'Tops').",
    )
    department: str | None = Field(
        None,
        max_length=100,
        description="Merchandise department (e.g., \"Men's Apparel\").",
    )
    price: Decimal | None = Field(
        None,
        ge=0,
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
        description="Retail price per unit (at most 99999999.99).",
    )
    cost: Decimal | None = Field(
        None,
        ge=0,
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
        description="Cost per unit (at most 99999999.99).",
    )


class SkuResponse(BaseModel):
    """SKU dimension record."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(..., description="SKU identifier (e.g., 'SK00158').")
    label: str = Field(..., description="Product display name.")
    sku_class: str = Field(
        ...,
        serialization_alias="class",
        description="Merchandise class.",
    )
    department: str = Field(..., description="Merchandise department.")
    price: Decimal = Field(..., description="Retail price per unit.")
    cost: Decimal = Field(..., description="Cost per unit.")
    created_at: datetime | None = Field(
        None,
        description="Timestamp when the SKU record was created.",
    )


class SkuListResponse(BaseModel):
    """All SKUs, ordered by id."""

    skus: list[SkuResponse] = Field(..., description="SKU records.")
    total: int = Field(..., ge=0, description="Number of SKUs returned.")


class DeleteResponse(BaseModel):
    """Confirmation returned by delete endpoints."""

    id: str = Field(..., description="Identifier of the deleted record.")
    message: str = Field(..., description="Human-readable confirmation.")
