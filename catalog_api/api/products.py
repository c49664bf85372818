"""Product API endpoints.

Provides create, list, lookup, update and delete over the catalog, plus
the gated administrative bulk delete.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_api.api.schemas import (
    BulkDeleteResponse,
    ErrorResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from catalog_api.catalog.service import ProductService
from catalog_api.common.pagination import PaginationParams, parse_pagination
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import get_session, get_session_factory

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_product_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> ProductService:
    """Get product service bound to the request session."""
    return ProductService(
        session,
        session_factory=session_factory,
        default_limit=settings.default_page_limit,
    )


def get_pagination(
    limit: Annotated[str | None, Query(description="Maximum number of products (positive)")] = None,
    offset: Annotated[str | None, Query(description="Number of products to skip (>= 0)")] = None,
) -> PaginationParams:
    """Validate pagination query parameters."""
    return parse_pagination({"limit": limit, "offset": offset})


ServiceDep = Annotated[ProductService, Depends(get_product_service)]


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
    },
    summary="Create product",
)
async def create_product(payload: ProductCreate, service: ServiceDep) -> dict[str, Any]:
    """Create a product with its images.

    Returns the created product with images as URLs.
    """
    return await service.create(payload)


@router.get(
    "",
    response_model=list[ProductResponse],
    responses={400: {"model": ErrorResponse}},
    summary="List products",
)
async def list_products(
    pagination: Annotated[PaginationParams, Depends(get_pagination)],
    service: ServiceDep,
) -> list[dict[str, Any]]:
    """List products with limit/offset pagination."""
    return await service.find_all(pagination)


@router.get(
    "/{term}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
    description="Look a product up by id, slug or title.",
)
async def get_product(term: str, service: ServiceDep) -> dict[str, Any]:
    """Get a product by id, slug or title."""
    return await service.find_one_plain(term)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Update product",
)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    service: ServiceDep,
) -> dict[str, Any]:
    """Partially update a product.

    Supplying ``images`` replaces all of the product's images.
    """
    return await service.update(product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete product",
)
async def delete_product(product_id: str, service: ServiceDep) -> Response:
    """Delete a product and its images."""
    await service.remove(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "",
    response_model=BulkDeleteResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
    summary="Delete all products",
    description=(
        "Administrative wipe of the whole catalog. Requires the admin API key, "
        "BULK_DELETE_ENABLED=true and confirm=true."
    ),
)
async def delete_all_products(
    request: Request,
    service: ServiceDep,
    confirm: Annotated[bool, Query(description="Must be true to proceed")] = False,
) -> BulkDeleteResponse:
    """Delete every product.

    Raises:
        HTTPException: If bulk delete is disabled or the caller is not admin.
    """
    if not settings.bulk_delete_enabled:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error_code": "BULK_DELETE_DISABLED",
                "message": "Bulk delete is disabled on this deployment",
            },
        )

    if not getattr(request.state, "is_admin", False):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error_code": "ADMIN_REQUIRED",
                "message": "Bulk delete requires the admin API key",
            },
        )

    request_id = getattr(request.state, "request_id", None)
    deleted = await service.delete_all_products(
        confirm=confirm,
        actor=f"admin-api-key:{request_id}",
    )
    return BulkDeleteResponse(deleted=deleted)
