"""SQLAlchemy models for the product catalog.

Defines Product and ProductImage tables for persistent storage.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text, Uuid, event
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.catalog.slug import product_slug
from catalog_api.infrastructure.database import Base


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier (UUID).
        title: Product title, unique.
        slug: URL-safe identifier derived from the title, unique.
        price: Unit price.
        stock: Units available.
        description: Product description.
        tags: Free-form tags.
        images: Images in insertion order.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    images: Mapped[list["ProductImage"]] = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductImage.id",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug})>"

    @property
    def images_loaded(self) -> bool:
        """Whether the images collection has been fetched."""
        return "images" not in sa_inspect(self).unloaded

    def to_dict(self) -> dict:
        """Convert to the plain API view.

        Images are flattened to their URLs. When the collection was not
        fetched the ``images`` key is left out rather than lazily loaded.

        Returns:
            Dictionary representation.
        """
        data = {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "price": self.price,
            "stock": self.stock,
            "description": self.description,
            "tags": list(self.tags or []),
        }
        if self.images_loaded:
            data["images"] = [image.url for image in self.images]
        return data


class ProductImage(Base):
    """Image attached to exactly one product.

    Images are created and deleted only as part of product writes.

    Attributes:
        id: Autoincrement key; also defines image order.
        url: Image URL.
        product_id: Owning product ID.
    """

    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    product_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="images")

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductImage(id={self.id}, url={self.url})>"


@event.listens_for(Product, "before_insert")
def _slug_before_insert(mapper, connection, target: Product) -> None:
    target.slug = product_slug(target.title, target.slug)


@event.listens_for(Product, "before_update")
def _slug_before_update(mapper, connection, target: Product) -> None:
    target.slug = product_slug(target.title, target.slug)
