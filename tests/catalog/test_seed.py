"""Tests for catalog seeding."""

from catalog_api.catalog.schemas import ProductCreate
from catalog_api.catalog.seed import SEED_PRODUCTS, seed_catalog
from catalog_api.catalog.service import ProductService
from catalog_api.common.pagination import PaginationParams


async def test_seed_creates_sample_products(service: ProductService) -> None:
    result = await seed_catalog(service)

    assert result["deleted"] == 0
    assert result["products_created"] == len(SEED_PRODUCTS)
    assert result["images_created"] == sum(len(p.images) for p in SEED_PRODUCTS)

    products = await service.find_all(PaginationParams(limit=100))
    assert len(products) == len(SEED_PRODUCTS)


async def test_seed_replaces_existing_products(service: ProductService) -> None:
    """Seeding twice leaves exactly one copy of each sample product."""
    await seed_catalog(service)

    result = await seed_catalog(service)

    assert result["deleted"] == len(SEED_PRODUCTS)
    products = await service.find_all(PaginationParams(limit=100))
    assert len(products) == len(SEED_PRODUCTS)


async def test_seed_without_clearing_keeps_products(service: ProductService) -> None:
    await service.create(ProductCreate(title="Custom Product"))

    result = await seed_catalog(
        service,
        products=[ProductCreate(title="Sample", images=["http://a/1.png"])],
        clear_existing=False,
    )

    assert result == {"deleted": 0, "products_created": 1, "images_created": 1}
    assert len(await service.find_all(PaginationParams())) == 2
