#!/usr/bin/env python3
"""Seed product catalog script.

Wipes the catalog and recreates the sample products. Because it deletes
every product, it refuses to run without ``--yes``.

Usage:
    python scripts/seed_catalog.py --yes
    python scripts/seed_catalog.py --yes --no-clear
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_api.catalog.seed import seed_catalog
from catalog_api.catalog.service import ProductService
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import async_session_factory, create_tables
from catalog_api.infrastructure.logging_config import configure_logging


async def seed(clear: bool) -> dict:
    """Seed the catalog.

    Args:
        clear: Whether to delete existing products first.

    Returns:
        Seeding result.
    """
    async with async_session_factory() as session:
        service = ProductService(session, session_factory=async_session_factory)
        return await seed_catalog(service, clear_existing=clear)


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with sample products",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm that existing products may be deleted",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Don't clear existing products before seeding",
    )

    args = parser.parse_args()
    clear = not args.no_clear

    if clear and not args.yes:
        parser.error("seeding deletes every product; pass --yes to confirm")

    configure_logging(settings.log_level, json=False)

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)
    print(f"Clear existing: {clear}")
    print()

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    result = await seed(clear)

    print(f"  ✓ Deleted: {result['deleted']} existing products")
    print(f"  ✓ Created: {result['products_created']} products")
    print(f"  ✓ Images: {result['images_created']}")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
