"""Audit timestamps shared by the store, SKU, calendar, and planning tables."""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column


class TimestampMixin:
    """Adds server-maintained created_at and updated_at columns.

    ORM updates refresh updated_at through ``onupdate``. Core statements such
    as ``INSERT ... ON CONFLICT DO UPDATE`` bypass that hook and must merge
    ``touch_values()`` into their SET clause.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @classmethod
    def touch_values(cls) -> dict[str, Any]:
        """SET-clause entries that mark a row as modified now."""
        return {"updated_at": func.now()}
