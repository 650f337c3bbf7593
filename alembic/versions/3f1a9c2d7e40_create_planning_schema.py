"""create_planning_schema

Revision ID: 3f1a9c2d7e40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1a9c2d7e40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Apply migration - create store, sku, calendar, and planning tables."""
    op.create_table(
        "store",
        sa.Column("id", sa.String(length=20), nullable=False),
        sa.Column("label", sa.String(length=100), nullable=False),
        sa.Column("city", sa.String(length=50), nullable=False),
        sa.Column("state", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "sku",
        sa.Column("id", sa.String(length=20), nullable=False),
        sa.Column("label", sa.String(length=200), nullable=False),
        sa.Column("class", sa.String(length=100), nullable=False),
        sa.Column("department", sa.String(length=100), nullable=False),
        sa.Column("price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("cost", sa.Numeric(precision=10, scale=2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("price >= 0", name="ck_sku_price_positive"),
        sa.CheckConstraint("cost >= 0", name="ck_sku_cost_positive"),
    )
    op.create_index("ix_sku_department", "sku", ["department"])

    op.create_table(
        "calendar",
        sa.Column("seq_no", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("week", sa.String(length=3), nullable=False),
        sa.Column("week_label", sa.String(length=20), nullable=False),
        sa.Column("month", sa.String(length=3), nullable=False),
        sa.Column("month_label", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("seq_no"),
        sa.CheckConstraint("seq_no >= 1", name="ck_calendar_seq_no_positive"),
    )
    op.create_index("ix_calendar_week", "calendar", ["week"], unique=True)
    op.create_index("ix_calendar_month", "calendar", ["month"])

    # Sparse fact table, one row per (store, sku, week)
    op.create_table(
        "planning",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("store_id", sa.String(length=20), nullable=False),
        sa.Column("sku_id", sa.String(length=20), nullable=False),
        sa.Column("week", sa.String(length=3), nullable=False),
        sa.Column("sales_units", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["store_id"], ["store.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sku_id"], ["sku.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["week"], ["calendar.week"]),
        sa.UniqueConstraint("store_id", "sku_id", "week", name="uq_planning_grain"),
        sa.CheckConstraint("sales_units >= 0", name="ck_planning_sales_units_positive"),
    )
    op.create_index("ix_planning_store_id", "planning", ["store_id"])
    op.create_index("ix_planning_sku_id", "planning", ["sku_id"])
    op.create_index("ix_planning_week", "planning", ["week"])
    op.create_index("ix_planning_store_week", "planning", ["store_id", "week"])


def downgrade() -> None:
    """Revert migration - drop planning schema."""
    op.drop_index("ix_planning_store_week", table_name="planning")
    op.drop_index("ix_planning_week", table_name="planning")
    op.drop_index("ix_planning_sku_id", table_name="planning")
    op.drop_index("ix_planning_store_id", table_name="planning")
    op.drop_table("planning")

    op.drop_index("ix_calendar_month", table_name="calendar")
    op.drop_index("ix_calendar_week", table_name="calendar")
    op.drop_table("calendar")

    op.drop_index("ix_sku_department", table_name="sku")
    op.drop_table("sku")

    op.drop_table("store")
