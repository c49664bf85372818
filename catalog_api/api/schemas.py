"""API request and response schemas.

Request bodies reuse the catalog input schemas; responses expose the plain
product view with images flattened to URLs.
"""

from typing import Any

from pydantic import BaseModel, Field

from catalog_api.catalog.schemas import ProductCreate, ProductUpdate

__all__ = [
    "BulkDeleteResponse",
    "ErrorResponse",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
]


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[dict[str, Any]] = Field(default_factory=list, description="Additional error details")
    request_id: str | None = Field(default=None, description="Request correlation ID")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductResponse(BaseModel):
    """Product with images as a flat list of URLs."""

    id: str
    title: str
    slug: str
    price: float
    stock: int
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class BulkDeleteResponse(BaseModel):
    """Result of deleting every product."""

    deleted: int
