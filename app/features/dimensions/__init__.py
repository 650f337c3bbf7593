"""Store and SKU dimension management.

List, create, and delete endpoints with identifier-prefix and uniqueness
validation.
"""

from app.features.dimensions.routes import router
from app.features.dimensions.schemas import (
    SkuCreate,
    SkuListResponse,
    SkuResponse,
    StoreCreate,
    StoreListResponse,
    StoreResponse,
)
from app.features.dimensions.service import DimensionService

__all__ = [
    "DimensionService",
    "SkuCreate",
    "SkuListResponse",
    "SkuResponse",
    "StoreCreate",
    "StoreListResponse",
    "StoreResponse",
    "router",
]
