"""Data platform feature for store/SKU sales planning.

This module provides the core data models:
- Dimension tables: Store, Sku, Calendar
- Fact table: Planning
"""

from app.features.data_platform.models import Calendar, Planning, Sku, Store

__all__ = [
    "Calendar",
    "Planning",
    "Sku",
    "Store",
]
