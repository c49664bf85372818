"""Product Catalog.

Models, repository and service for products and their images.
"""

from catalog_api.catalog.models import Product, ProductImage
from catalog_api.catalog.repository import ProductRepository
from catalog_api.catalog.schemas import ProductCreate, ProductUpdate
from catalog_api.catalog.service import ProductService
from catalog_api.catalog.slug import product_slug, slugify

__all__ = [
    # Models
    "Product",
    "ProductImage",
    # Schemas
    "ProductCreate",
    "ProductUpdate",
    # Repository
    "ProductRepository",
    # Service
    "ProductService",
    # Helpers
    "product_slug",
    "slugify",
]
