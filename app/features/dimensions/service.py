"""Service layer for Store and SKU CRUD operations.

Create rules run in a fixed order before any write:
required fields -> identifier prefix -> duplicate identifier -> insert.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import get_logger
from app.features.data_platform.models import Sku, Store
from app.features.dimensions.repository import (
    DimensionRepositoryProtocol,
    SqlDimensionRepository,
)
from app.features.dimensions.schemas import (
    SkuCreate,
    SkuListResponse,
    SkuResponse,
    StoreCreate,
    StoreListResponse,
    StoreResponse,
)

logger = get_logger(__name__)

STORE_REQUIRED_FIELDS = ("id", "label", "city", "state")
SKU_REQUIRED_FIELDS = ("id", "label", "sku_class", "department", "price", "cost")

# Wire names differ from attribute names for a few fields
_FIELD_DISPLAY_NAMES = {"sku_class": "class"}


def _require_fields(payload: dict[str, Any], required: tuple[str, ...]) -> None:
    """Raise a field-level ValidationError listing every missing field.

    Empty strings count as missing.
    """
    missing = [name for name in required if payload.get(name) in (None, "")]
    if not missing:
        return

    display = [_FIELD_DISPLAY_NAMES.get(name, name) for name in missing]
    raise ValidationError(
        message=f"Missing required field(s): {', '.join(display)}",
        details={"missing": display},
        errors=[
            {"field": name, "message": "Field is required", "type": "missing"}
            for name in display
        ],
    )


def _require_prefix(identifier: str, prefix: str, entity: str) -> None:
    if not identifier.startswith(prefix):
        raise ValidationError.for_field(
            "id",
            f"{entity} ID must start with '{prefix}' prefix",
            "bad_prefix",
        )


def _duplicate(entity: str, identifier: str) -> ValidationError:
    return ValidationError.for_field(
        "id",
        f"{entity} ID already exists: {identifier}",
        "duplicate_id",
    )


class DimensionService:
    """Service for listing, creating, and deleting stores and SKUs.

    The datastore is reached only through the injected repository, so tests
    can substitute an in-memory implementation.
    """

    def __init__(self, repository: DimensionRepositoryProtocol | None = None) -> None:
        """Initialize dimension service.

        Args:
            repository: Store/SKU repository (defaults to SQLAlchemy).
        """
        self.settings = get_settings()
        self.repository = repository or SqlDimensionRepository()

    # -------------------------------------------------------------------------
    # Stores
    # -------------------------------------------------------------------------

    async def list_stores(self, db: AsyncSession) -> StoreListResponse:
        """List all stores.

        Args:
            db: Database session.

        Returns:
            All stores ordered by id.
        """
        stores = await self.repository.list_stores(db)

        logger.info("dimensions.stores_listed", total=len(stores))

        return StoreListResponse(
            stores=[StoreResponse.model_validate(store) for store in stores],
            total=len(stores),
        )

    async def create_store(self, db: AsyncSession, data: StoreCreate) -> StoreResponse:
        """Create a store after validating fields, prefix, and uniqueness.

        Args:
            db: Database session.
            data: Store payload.

        Returns:
            The created store.

        Raises:
            ValidationError: Missing field, bad prefix, or duplicate id.
        """
        payload = data.model_dump()
        _require_fields(payload, STORE_REQUIRED_FIELDS)

        store_id: str = payload["id"]
        _require_prefix(store_id, self.settings.store_id_prefix, "Store")

        if await self.repository.get_store(db, store_id) is not None:
            logger.warning("dimensions.store_duplicate", store_id=store_id)
            raise _duplicate("Store", store_id)

        store = Store(
            id=store_id,
            label=payload["label"],
            city=payload["city"],
            state=payload["state"],
        )
        try:
            store = await self.repository.add_store(db, store)
        except IntegrityError as e:
            # Lost a race with a concurrent create of the same id
            await db.rollback()
            raise _duplicate("Store", store_id) from e

        logger.info("dimensions.store_created", store_id=store_id)
        return StoreResponse.model_validate(store)

    async def delete_store(self, db: AsyncSession, store_id: str) -> None:
        """Delete a store (and, by cascade, its planning rows).

        Args:
            db: Database session.
            store_id: Store identifier.

        Raises:
            NotFoundError: If the store does not exist.
        """
        deleted = await self.repository.delete_store(db, store_id)
        if not deleted:
            raise NotFoundError(
                message=f"Store not found: {store_id}",
                details={"store_id": store_id},
            )

        logger.info("dimensions.store_deleted", store_id=store_id)

    # -------------------------------------------------------------------------
    # SKUs
    # -------------------------------------------------------------------------

    async def list_skus(self, db: AsyncSession) -> SkuListResponse:
        """List all SKUs.

        Args:
            db: Database session.

        Returns:
            All SKUs ordered by id.
        """
        skus = await self.repository.list_skus(db)

        logger.info("dimensions.skus_listed", total=len(skus))

        return SkuListResponse(
            skus=[SkuResponse.model_validate(sku) for sku in skus],
            total=len(skus),
        )

    async def create_sku(self, db: AsyncSession, data: SkuCreate) -> SkuResponse:
        """Create a SKU after validating fields, prefix, and uniqueness.

        Args:
            db: Database session.
            data: SKU payload.

        Returns:
            The created SKU.

        Raises:
            ValidationError: Missing field, bad prefix, or duplicate id.
        """
        payload = data.model_dump()
        _require_fields(payload, SKU_REQUIRED_FIELDS)

        sku_id: str = payload["id"]
        _require_prefix(sku_id, self.settings.sku_id_prefix, "SKU")

        if await self.repository.get_sku(db, sku_id) is not None:
            logger.warning("dimensions.sku_duplicate", sku_id=sku_id)
            raise _duplicate("SKU", sku_id)

        sku = Sku(
            id=sku_id,
            label=payload["label"],
            sku_class=payload["sku_class"],
            department=payload["department"],
            price=payload["price"],
            cost=payload["cost"],
        )
        try:
            sku = await self.repository.add_sku(db, sku)
        except IntegrityError as e:
            await db.rollback()
            raise _duplicate("SKU", sku_id) from e

        logger.info("dimensions.sku_created", sku_id=sku_id)
        return SkuResponse.model_validate(sku)

    async def delete_sku(self, db: AsyncSession, sku_id: str) -> None:
        """Delete a SKU (and, by cascade, its planning rows).

        Args:
            db: Database session.
            sku_id: SKU identifier.

        Raises:
            NotFoundError: If the SKU does not exist.
        """
        deleted = await self.repository.delete_sku(db, sku_id)
        if not deleted:
            raise NotFoundError(
                message=f"SKU not found: {sku_id}",
                details={"sku_id": sku_id},
            )

        logger.info("dimensions.sku_deleted", sku_id=sku_id)


def get_dimension_service() -> DimensionService:
    """FastAPI dependency returning a DimensionService."""
    return DimensionService()
