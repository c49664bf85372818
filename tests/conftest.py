"""Shared fixtures.

Each test gets its own SQLite file database (via aiosqlite) with foreign
keys enforced, so unit-of-work sessions and request sessions see each
other's committed writes the way they would on PostgreSQL.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

import catalog_api.catalog.models  # noqa: F401
from catalog_api.catalog.service import ProductService
from catalog_api.infrastructure.database import Base


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh database with all tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session standing in for a request-scoped session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def service(
    session: AsyncSession,
    session_factory: async_sessionmaker[AsyncSession],
) -> ProductService:
    """Product service on the test database."""
    return ProductService(session, session_factory=session_factory)
