"""Sample catalog data and seeding.

Seeding wipes the catalog and recreates a fixed set of products, so it is
only meant for development and demo databases.
"""

from typing import Any

from catalog_api.catalog.schemas import ProductCreate
from catalog_api.catalog.service import ProductService

SEED_PRODUCTS: list[ProductCreate] = [
    ProductCreate(
        title="Chill Crew Neck Sweatshirt",
        price=75,
        stock=7,
        description="Midweight heather sweatshirt with a relaxed crew neck.",
        tags=["sweatshirt"],
        images=[
            "https://cdn.example.com/products/chill-crew-neck-1.jpg",
            "https://cdn.example.com/products/chill-crew-neck-2.jpg",
        ],
    ),
    ProductCreate(
        title="Quilted Shirt Jacket",
        price=200,
        stock=5,
        description="Water-resistant quilted overshirt with snap closures.",
        tags=["jacket"],
        images=[
            "https://cdn.example.com/products/quilted-shirt-jacket-1.jpg",
        ],
    ),
    ProductCreate(
        title="Raven Lightweight Zip Up Bomber Jacket",
        price=130,
        stock=10,
        description="Modern bomber with a matte finish and ribbed trims.",
        tags=["shirt"],
        images=[
            "https://cdn.example.com/products/raven-bomber-1.jpg",
            "https://cdn.example.com/products/raven-bomber-2.jpg",
        ],
    ),
    ProductCreate(
        title="Turbine Long Sleeve Tee",
        price=45,
        stock=50,
        description="Cotton long sleeve tee with a printed sleeve graphic.",
        tags=["shirt"],
        images=[
            "https://cdn.example.com/products/turbine-long-sleeve-1.jpg",
        ],
    ),
    ProductCreate(
        title="Men's 3D Large Wordmark Tee",
        price=35,
        stock=12,
        description="Soft cotton tee with a raised wordmark print.",
        tags=["shirt"],
        images=[
            "https://cdn.example.com/products/3d-wordmark-tee-1.jpg",
            "https://cdn.example.com/products/3d-wordmark-tee-2.jpg",
        ],
    ),
    ProductCreate(
        title="Cybertruck Bulletproof Tee",
        price=30,
        stock=0,
        description="Graphic tee; restocking soon.",
        tags=["shirt"],
        images=[],
    ),
]


async def seed_catalog(
    service: ProductService,
    products: list[ProductCreate] | None = None,
    clear_existing: bool = True,
) -> dict[str, Any]:
    """Seed the product catalog.

    Args:
        service: Product service bound to the target database.
        products: Products to create; defaults to ``SEED_PRODUCTS``.
        clear_existing: Whether to delete every existing product first.

    Returns:
        Seeding result with counts.
    """
    products = SEED_PRODUCTS if products is None else products

    deleted = 0
    if clear_existing:
        deleted = await service.delete_all_products(confirm=True, actor="seed")

    created = [await service.create(product) for product in products]

    return {
        "deleted": deleted,
        "products_created": len(created),
        "images_created": sum(len(p["images"]) for p in created),
    }
