"""Product repository for database operations.

Exposes only the data-access operations the catalog service needs:
paginated listing, lookup by id or by title/slug, preload-and-merge,
save, delete, image replacement and bulk delete.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog_api.catalog.models import Product, ProductImage


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with get_session() as session:
            repo = ProductRepository(session)
            products = await repo.find_all(limit=20, offset=40)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: Product) -> Product:
        """Save a product (and any attached images) to database.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(
        self,
        product_id: str,
        include_images: bool = False,
        refresh: bool = False,
    ) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            include_images: Whether to eagerly load images.
            refresh: Overwrite any state already held in the session's
                identity map with the row as stored.

        Returns:
            Product if found, None otherwise.
        """
        query = select(Product).where(Product.id == product_id)

        if include_images:
            query = query.options(selectinload(Product.images))

        if refresh:
            query = query.execution_options(populate_existing=True)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find_by_title_or_slug(self, term: str, refresh: bool = False) -> Product | None:
        """Find a product whose title or slug matches a search term.

        Titles compare case-insensitively; slugs are stored lowercase and
        compared against the lowercased term. Images are always loaded.

        Args:
            term: Title or slug.
            refresh: Overwrite any state already held in the session.

        Returns:
            Product if found, None otherwise.
        """
        query = (
            select(Product)
            .where(
                or_(
                    func.upper(Product.title) == term.upper(),
                    Product.slug == term.lower(),
                )
            )
            .options(selectinload(Product.images))
            .limit(1)
        )

        if refresh:
            query = query.execution_options(populate_existing=True)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find_all(
        self,
        limit: int = 10,
        offset: int = 0,
        include_images: bool = True,
    ) -> Sequence[Product]:
        """Find products with pagination.

        Row order is whatever the store returns.

        Args:
            limit: Maximum results.
            offset: Result offset for pagination.
            include_images: Whether to eagerly load images.

        Returns:
            Sequence of products.
        """
        query = select(Product).limit(limit).offset(offset)

        if include_images:
            query = query.options(selectinload(Product.images))

        result = await self.session.execute(query)
        return result.scalars().all()

    async def preload(self, product_id: str, changes: dict[str, Any]) -> Product | None:
        """Load a product and merge partial changes into it.

        Fields absent from ``changes`` keep their stored values. Images are
        not loaded.

        Args:
            product_id: Product ID.
            changes: Column values to apply.

        Returns:
            Merged (unsaved) product, or None if it does not exist.
        """
        product = await self.get_by_id(product_id)
        if product is None:
            return None

        for key, value in changes.items():
            setattr(product, key, value)

        return product

    async def delete_images(self, product_id: str) -> int:
        """Delete every image row belonging to a product.

        Args:
            product_id: Owning product ID.

        Returns:
            Number of deleted images.
        """
        result = await self.session.execute(
            delete(ProductImage)
            .where(ProductImage.product_id == product_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete(self, product: Product) -> None:
        """Delete a product; its images go with it.

        Args:
            product: Product to delete.
        """
        await self.session.delete(product)
        await self.session.flush()

    async def delete_all(self) -> int:
        """Delete every product.

        Image rows are deleted first so the result does not depend on the
        store enforcing ``ON DELETE CASCADE``.

        Returns:
            Number of deleted products.
        """
        await self.session.execute(
            delete(ProductImage).execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            delete(Product).execution_options(synchronize_session=False)
        )
        # Nothing loaded before the wipe is still valid
        self.session.expunge_all()
        return result.rowcount
