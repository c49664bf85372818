"""Catalog service for product operations.

High-level service that combines repository operations with lookup
dispatch, transactional image replacement and translation of store errors
into domain errors.
"""

from typing import Any, NoReturn
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.attributes import set_committed_value

from catalog_api.catalog.models import Product, ProductImage
from catalog_api.catalog.repository import ProductRepository
from catalog_api.catalog.schemas import ProductCreate, ProductUpdate
from catalog_api.common.pagination import PaginationParams
from catalog_api.domain.exceptions import (
    BulkDeleteNotConfirmedError,
    CatalogInternalError,
    DomainError,
    InvalidProductIdError,
    ProductConflictError,
    ProductNotFoundError,
)
from catalog_api.infrastructure.database import UnitOfWork, async_session_factory
from catalog_api.infrastructure.db_errors import get_error_detail, is_unique_violation


def is_uuid(value: str) -> bool:
    """Check whether a string is a canonical (hyphenated) UUID."""
    try:
        return str(UUID(value)) == value.lower()
    except (ValueError, AttributeError):
        return False


class ProductService:
    """Service for product CRUD operations.

    Reads and single-statement writes go through the session the service
    was built with. Updates run on their own unit of work so that image
    replacement and the product save commit or roll back together.

    Example usage:
        async with async_session_factory() as session:
            service = ProductService(session)
            product = await service.create(ProductCreate(title="Chair", price=10))
            same = await service.find_one_plain("chair")
    """

    def __init__(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        logger: Any | None = None,
        default_limit: int = 10,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            session_factory: Factory for unit-of-work sessions.
            logger: Bound structlog logger; one is created when omitted.
            default_limit: Page size used when the caller gives no limit.
        """
        self.session = session
        self.repository = ProductRepository(session)
        self.session_factory = session_factory or async_session_factory
        self.logger = logger or structlog.get_logger().bind(service="ProductService")
        self.default_limit = default_limit

    def unit_of_work(self) -> UnitOfWork:
        """Create a unit of work on a fresh session."""
        return UnitOfWork(self.session_factory)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create(self, payload: ProductCreate) -> dict[str, Any]:
        """Create a product together with its images.

        Args:
            payload: Product fields and image URLs.

        Returns:
            Plain product view; ``images`` is the list of URLs.

        Raises:
            ProductConflictError: If title or slug is already taken.
            CatalogInternalError: On any other store failure.
        """
        data = payload.model_dump()
        images = data.pop("images")

        product = Product(
            **data,
            images=[ProductImage(url=url) for url in images],
        )

        try:
            await self.repository.save(product)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            self._handle_db_exceptions(e)

        self.logger.info("Product created", product_id=product.id, slug=product.slug)
        return {**product.to_dict(), "images": images}

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def find_all(self, pagination: PaginationParams) -> list[dict[str, Any]]:
        """List products, images flattened to URLs.

        Args:
            pagination: Page bounds; missing values fall back to defaults.

        Returns:
            Plain product views.
        """
        limit, offset = pagination.resolve(self.default_limit)

        products = await self.repository.find_all(
            limit=limit,
            offset=offset,
            include_images=True,
        )
        return [product.to_dict() for product in products]

    async def find_one(
        self,
        term: str,
        include_images: bool = False,
        refresh: bool = False,
    ) -> Product:
        """Resolve a product by id, slug or title.

        A UUID term is looked up by primary key; images are only fetched
        when ``include_images`` is set. Any other term matches the title
        case-insensitively or the slug, with images loaded.

        Args:
            term: Product id, slug or title.
            include_images: Load images on the id branch too.
            refresh: Re-read the row over any state cached in the session.

        Returns:
            The matching product.

        Raises:
            ProductNotFoundError: If nothing matches.
        """
        if is_uuid(term):
            product = await self.repository.get_by_id(
                term,
                include_images=include_images,
                refresh=refresh,
            )
        else:
            product = await self.repository.find_by_title_or_slug(term, refresh=refresh)

        if product is None:
            raise ProductNotFoundError(term)

        return product

    async def find_one_plain(self, term: str) -> dict[str, Any]:
        """Resolve a product and return its plain view.

        Args:
            term: Product id, slug or title.

        Returns:
            Plain product view with images as URLs.
        """
        product = await self.find_one(term, include_images=True, refresh=True)
        return product.to_dict()

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    async def update(self, product_id: str, payload: ProductUpdate) -> dict[str, Any]:
        """Apply a partial update, optionally replacing all images.

        Runs as one transaction: preload and merge, delete old images (when
        new ones are given), save, commit. Any failure rolls everything
        back. The result is read back from the store after commit.

        Args:
            product_id: Product UUID.
            payload: Fields to change; unset fields keep their values.

        Returns:
            Plain view of the updated product.

        Raises:
            InvalidProductIdError: If ``product_id`` is not a UUID.
            ProductNotFoundError: If the product does not exist.
            ProductConflictError: If the new title or slug is taken.
            CatalogInternalError: On any other store failure.
        """
        if not is_uuid(product_id):
            raise InvalidProductIdError(product_id)

        changes = payload.model_dump(exclude_unset=True)
        images = changes.pop("images", None)

        try:
            async with self.unit_of_work() as uow:
                repository = ProductRepository(uow.session)

                product = await repository.preload(product_id, changes)
                if product is None:
                    raise ProductNotFoundError(product_id)

                if images is not None:
                    await repository.delete_images(product_id)
                    # Old rows are gone already; start from an empty collection
                    set_committed_value(product, "images", [])
                    product.images = [ProductImage(url=url) for url in images]

                await repository.save(product)
                await uow.commit()
        except DomainError:
            raise
        except Exception as e:
            self._handle_db_exceptions(e)

        self.logger.info(
            "Product updated",
            product_id=product_id,
            fields=sorted(changes),
            images_replaced=images is not None,
        )
        return await self.find_one_plain(product_id)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def remove(self, product_id: str) -> None:
        """Hard-delete a product and its images.

        Args:
            product_id: Product UUID.

        Raises:
            InvalidProductIdError: If ``product_id`` is not a UUID.
            ProductNotFoundError: If the product does not exist.
        """
        if not is_uuid(product_id):
            raise InvalidProductIdError(product_id)

        product = await self.find_one(product_id, include_images=True)

        try:
            await self.repository.delete(product)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            self._handle_db_exceptions(e)

        self.logger.info("Product deleted", product_id=product_id)

    async def delete_all_products(self, *, confirm: bool = False, actor: str | None = None) -> int:
        """Delete every product in the catalog.

        Args:
            confirm: Must be True; guards against accidental wipes.
            actor: Who requested the wipe, recorded in the audit log.

        Returns:
            Number of deleted products.

        Raises:
            BulkDeleteNotConfirmedError: If ``confirm`` is not set.
            CatalogInternalError: On store failure.
        """
        if not confirm:
            raise BulkDeleteNotConfirmedError()

        try:
            deleted = await self.repository.delete_all()
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            self._handle_db_exceptions(e)

        self.logger.warning("All products deleted", deleted=deleted, actor=actor)
        return deleted

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _handle_db_exceptions(self, error: Exception) -> NoReturn:
        """Translate a store error into a domain error.

        Must be called from inside the ``except`` block handling ``error``.

        Raises:
            ProductConflictError: For unique-constraint violations.
            CatalogInternalError: For everything else (logged with traceback).
        """
        if is_unique_violation(error):
            raise ProductConflictError(get_error_detail(error)) from error

        self.logger.exception("Unexpected database error", error=str(error))
        raise CatalogInternalError() from error

