"""API routes for Store and SKU management."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import DatabaseError
from app.core.logging import get_logger
from app.features.dimensions.schemas import (
    DeleteResponse,
    SkuCreate,
    SkuListResponse,
    SkuResponse,
    StoreCreate,
    StoreListResponse,
    StoreResponse,
)
from app.features.dimensions.service import DimensionService, get_dimension_service

logger = get_logger(__name__)

router = APIRouter(tags=["dimensions"])


def _database_error(event: str, message: str, e: SQLAlchemyError) -> DatabaseError:
    logger.error(
        event,
        error=str(e),
        error_type=type(e).__name__,
        exc_info=True,
    )
    return DatabaseError(message=message, details={"error": str(e)})


# =============================================================================
# Store Endpoints
# =============================================================================


@router.get(
    "/stores",
    response_model=StoreListResponse,
    summary="List all stores",
)
async def list_stores(
    db: AsyncSession = Depends(get_db),
    service: DimensionService = Depends(get_dimension_service),
) -> StoreListResponse:
    """List every store ordered by id.

    Args:
        db: Database session.
        service: Dimension service.

    Returns:
        All stores.
    """
    try:
        return await service.list_stores(db)
    except SQLAlchemyError as e:
        raise _database_error("dimensions.list_stores_failed", "Failed to list stores", e) from e


@router.post(
    "/stores",
    response_model=StoreResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a store",
    description="""
Create a store record.

**Validation (in order):**
- `id`, `label`, `city`, `state` are required
- `id` must start with the configured store prefix (default `ST`)
- `id` must not already exist

Every failure returns 422 with a field-level `errors` list.
""",
)
async def create_store(
    request: StoreCreate,
    db: AsyncSession = Depends(get_db),
    service: DimensionService = Depends(get_dimension_service),
) -> StoreResponse:
    """Create a store.

    Args:
        request: Store payload.
        db: Database session.
        service: Dimension service.

    Returns:
        The created store.
    """
    try:
        return await service.create_store(db, request)
    except SQLAlchemyError as e:
        raise _database_error("dimensions.create_store_failed", "Failed to create store", e) from e


@router.delete(
    "/stores/{store_id}",
    response_model=DeleteResponse,
    summary="Delete a store",
    description="Delete a store by id. Its planning rows are removed with it. "
    "Returns 404 if the store does not exist.",
)
async def delete_store(
    store_id: str,
    db: AsyncSession = Depends(get_db),
    service: DimensionService = Depends(get_dimension_service),
) -> DeleteResponse:
    """Delete a store.

    Args:
        store_id: Store identifier.
        db: Database session.
        service: Dimension service.

    Returns:
        Deletion confirmation.
    """
    try:
        await service.delete_store(db, store_id)
    except SQLAlchemyError as e:
        raise _database_error("dimensions.delete_store_failed", "Failed to delete store", e) from e

    return DeleteResponse(id=store_id, message="Store deleted successfully")


# =============================================================================
# SKU Endpoints
# =============================================================================


@router.get(
    "/skus",
    response_model=SkuListResponse,
    summary="List all SKUs",
)
async def list_skus(
    db: AsyncSession = Depends(get_db),
    service: DimensionService = Depends(get_dimension_service),
) -> SkuListResponse:
    """List every SKU ordered by id.

    Args:
        db: Database session.
        service: Dimension service.

    Returns:
        All SKUs.
    """
    try:
        return await service.list_skus(db)
    except SQLAlchemyError as e:
        raise _database_error("dimensions.list_skus_failed", "Failed to list SKUs", e) from e


@router.post(
    "/skus",
    response_model=SkuResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a SKU",
    description="""
Create a SKU record.

**Validation (in order):**
- `id`, `label`, `class`, `department`, `price`, `cost` are required
- `price` and `cost` must be non-negative
- `id` must start with the configured SKU prefix (default `SK`)
- `id` must not already exist
""",
)
async def create_sku(
    request: SkuCreate,
    db: AsyncSession = Depends(get_db),
    service: DimensionService = Depends(get_dimension_service),
) -> SkuResponse:
    """Create a SKU.

    Args:
        request: SKU payload.
        db: Database session.
        service: Dimension service.

    Returns:
        The created SKU.
    """
    try:
        return await service.create_sku(db, request)
    except SQLAlchemyError as e:
        raise _database_error("dimensions.create_sku_failed", "Failed to create SKU", e) from e


@router.delete(
    "/skus/{sku_id}",
    response_model=DeleteResponse,
    summary="Delete a SKU",
    description="Delete a SKU by id. Its planning rows are removed with it. "
    "Returns 404 if the SKU does not exist.",
)
async def delete_sku(
    sku_id: str,
    db: AsyncSession = Depends(get_db),
    service: DimensionService = Depends(get_dimension_service),
) -> DeleteResponse:
    """Delete a SKU.

    Args:
        sku_id: SKU identifier.
        db: Database session.
        service: Dimension service.

    Returns:
        Deletion confirmation.
    """
    try:
        await service.delete_sku(db, sku_id)
    except SQLAlchemyError as e:
        raise _database_error("dimensions.delete_sku_failed", "Failed to delete SKU", e) from e

    return DeleteResponse(id=sku_id, message="SKU deleted successfully")
