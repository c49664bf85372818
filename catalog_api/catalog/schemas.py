"""Input schemas for catalog writes."""

from pydantic import BaseModel, Field, field_validator


class ProductCreate(BaseModel):
    """Fields accepted when creating a product.

    ``slug`` is derived from ``title`` when omitted. ``images`` holds image
    URLs; one image row is created per entry.
    """

    title: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    price: float = Field(default=0, ge=0)
    stock: int = Field(default=0, ge=0)
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    """Partial update; only fields that are set are applied.

    An explicit ``null`` clears ``description`` and re-derives ``slug``
    from the title. Supplying ``images`` replaces every existing image of
    the product.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    price: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    description: str | None = None
    tags: list[str] | None = None
    images: list[str] | None = None

    @field_validator("title", "price", "stock", "tags", "images", mode="before")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v
