"""Domain exceptions.

All catalog-level errors raised by validation, lookups and persistence.
The API layer maps each of them to an HTTP status and error code; nothing
below this module knows about HTTP.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    error_code = "ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(DomainError):
    """Raised when caller input is rejected before reaching the store."""

    error_code = "VALIDATION_ERROR"


class InvalidPaginationError(ValidationError):
    """Raised when limit/offset fail validation.

    ``errors`` holds one ``{"field", "reason"}`` entry per failing field.
    """

    def __init__(self, errors: list[dict[str, str]]) -> None:
        """Initialize invalid pagination error.

        Args:
            errors: Field-level failures.
        """
        fields = ", ".join(e["field"] for e in errors)
        super().__init__(
            f"Invalid pagination parameters: {fields}",
            details={"errors": errors},
        )
        self.errors = errors


class InvalidProductIdError(ValidationError):
    """Raised when a product id is not a valid UUID."""

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Product id must be a UUID: {product_id}",
            details={"product_id": product_id},
        )


# ============================================================================
# Product Errors
# ============================================================================


class ProductError(DomainError):
    """Base class for product-related errors."""

    pass


class ProductNotFoundError(ProductError):
    """Raised when no product matches an id, slug or title."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, term: str) -> None:
        """Initialize product not found error.

        Args:
            term: The id, slug or title that was looked up.
        """
        super().__init__(
            f"Product with id, slug or title '{term}' not found",
            details={"term": term},
        )


class ProductConflictError(ProductError):
    """Raised when a write violates a uniqueness constraint.

    The message carries the store's own detail (e.g. which key collided).
    """

    error_code = "PRODUCT_CONFLICT"

    def __init__(self, detail: str) -> None:
        super().__init__(detail, details={"detail": detail})


class BulkDeleteNotConfirmedError(ProductError):
    """Raised when deleting every product is requested without confirmation."""

    error_code = "BULK_DELETE_NOT_CONFIRMED"

    def __init__(self) -> None:
        super().__init__(
            "Deleting all products requires explicit confirmation",
        )


# ============================================================================
# Infrastructure Errors
# ============================================================================


class CatalogInternalError(DomainError):
    """Raised for unexpected store failures.

    The message is generic; the cause is logged server-side.
    """

    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Unexpected error, check server logs") -> None:
        super().__init__(message)
