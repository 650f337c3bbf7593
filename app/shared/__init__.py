"""Shared model mixins."""

from app.shared.models import TimestampMixin

__all__ = ["TimestampMixin"]
