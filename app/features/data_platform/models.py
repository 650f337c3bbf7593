"""Data platform ORM models for store/SKU sales planning.

Star schema:
- Dimensions: Store, Sku, Calendar
- Fact: Planning

Grain: Planning uniquely keyed by (store_id, sku_id, week). Facts are sparse,
a missing row means no planned sales for that store/SKU/week.
"""

from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.shared.models import TimestampMixin

# ============================================================================
# DIMENSION TABLES
# ============================================================================


class Store(TimestampMixin, Base):
    """Store dimension table.

    Attributes:
        id: Business identifier, primary key (e.g., "ST035").
        label: Store display name.
        city: City location.
        state: State code.
    """

    __tablename__ = "store"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    label: Mapped[str] = mapped_column(String(100))
    city: Mapped[str] = mapped_column(String(50))
    state: Mapped[str] = mapped_column(String(20))

    planning: Mapped[list["Planning"]] = relationship(
        back_populates="store",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Sku(TimestampMixin, Base):
    """SKU (product) dimension table.

    Attributes:
        id: Business identifier, primary key (e.g., "SK00158").
        label: Product display name.
        sku_class: Merchandise class.
        department: Merchandise department.
        price: Retail price per unit.
        cost: Cost per unit.
    """

    __tablename__ = "sku"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    label: Mapped[str] = mapped_column(String(200))
    sku_class: Mapped[str] = mapped_column("class", String(100))
    department: Mapped[str] = mapped_column(String(100), index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    cost: Mapped[Decimal] = mapped_column(Numeric(10, 2))

    planning: Mapped[list["Planning"]] = relationship(
        back_populates="sku",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_sku_price_positive"),
        CheckConstraint("cost >= 0", name="ck_sku_cost_positive"),
    )


class Calendar(TimestampMixin, Base):
    """Planning calendar: one row per week of the retail year.

    Attributes:
        seq_no: Position in the year (1-52), primary key.
        week: Week token (e.g., "W01").
        week_label: Display label (e.g., "Week 01").
        month: Month token (e.g., "M01").
        month_label: Display label (e.g., "Feb").
    """

    __tablename__ = "calendar"

    seq_no: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    week: Mapped[str] = mapped_column(String(3), unique=True, index=True)
    week_label: Mapped[str] = mapped_column(String(20))
    month: Mapped[str] = mapped_column(String(3), index=True)
    month_label: Mapped[str] = mapped_column(String(20))

    planning: Mapped[list["Planning"]] = relationship(back_populates="calendar")

    __table_args__ = (CheckConstraint("seq_no >= 1", name="ck_calendar_seq_no_positive"),)


# ============================================================================
# FACT TABLES
# ============================================================================


class Planning(TimestampMixin, Base):
    """Weekly sales-planning fact table.

    CRITICAL: Grain is (store_id, sku_id, week) - one row per store/SKU/week.
    Enforced by unique constraint for idempotent upserts.

    Attributes:
        id: Surrogate primary key.
        store_id: Store (FK, cascades on delete).
        sku_id: SKU (FK, cascades on delete).
        week: Week token (FK to calendar.week).
        sales_units: Planned units sold.
    """

    __tablename__ = "planning"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[str] = mapped_column(
        String(20), ForeignKey("store.id", ondelete="CASCADE"), index=True
    )
    sku_id: Mapped[str] = mapped_column(
        String(20), ForeignKey("sku.id", ondelete="CASCADE"), index=True
    )
    week: Mapped[str] = mapped_column(String(3), ForeignKey("calendar.week"), index=True)
    sales_units: Mapped[int] = mapped_column(Integer)

    store: Mapped["Store"] = relationship(back_populates="planning")
    sku: Mapped["Sku"] = relationship(back_populates="planning")
    calendar: Mapped["Calendar"] = relationship(back_populates="planning")

    __table_args__ = (
        UniqueConstraint("store_id", "sku_id", "week", name="uq_planning_grain"),
        Index("ix_planning_store_week", "store_id", "week"),
        CheckConstraint("sales_units >= 0", name="ck_planning_sales_units_positive"),
    )
