"""Domain layer: errors shared by the catalog and API layers."""

from catalog_api.domain.exceptions import (
    BulkDeleteNotConfirmedError,
    CatalogInternalError,
    DomainError,
    InvalidPaginationError,
    InvalidProductIdError,
    ProductConflictError,
    ProductError,
    ProductNotFoundError,
    ValidationError,
)

__all__ = [
    "BulkDeleteNotConfirmedError",
    "CatalogInternalError",
    "DomainError",
    "InvalidPaginationError",
    "InvalidProductIdError",
    "ProductConflictError",
    "ProductError",
    "ProductNotFoundError",
    "ValidationError",
]
