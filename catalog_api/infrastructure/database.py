"""Database configuration and session management.

Provides async SQLAlchemy engine, session factory and a transaction-scoped
unit of work for multi-statement writes.
"""

from collections.abc import AsyncGenerator
from types import TracebackType

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from catalog_api.infrastructure.config import settings

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for models
Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession for database operations.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the factory used for unit-of-work sessions."""
    return async_session_factory


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    # Register models on Base.metadata
    import catalog_api.catalog.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping(session: AsyncSession) -> None:
    """Run a trivial query to check database connectivity.

    Args:
        session: Session to run the query on.
    """
    await session.execute(text("SELECT 1"))


class UnitOfWork:
    """Transaction scope over a dedicated session.

    The session is acquired on ``connect`` and always released, whether the
    work committed, rolled back or failed before starting a transaction.

    Example usage:
        async with UnitOfWork(async_session_factory) as uow:
            uow.session.add(product)
            await uow.commit()

    Leaving the block without ``commit`` (or with an exception) rolls back.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize unit of work.

        Args:
            session_factory: Factory producing new sessions.
        """
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._committed = False

    @property
    def session(self) -> AsyncSession:
        """Session bound to this unit of work."""
        if self._session is None:
            raise RuntimeError("UnitOfWork is not connected")
        return self._session

    async def connect(self) -> None:
        """Acquire a session."""
        self._session = self._session_factory()
        self._committed = False

    async def start_transaction(self) -> None:
        """Begin a transaction on the acquired session."""
        await self.session.begin()

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        await self.session.rollback()

    async def release(self) -> None:
        """Close the session and return its connection to the pool."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "UnitOfWork":
        await self.connect()
        try:
            await self.start_transaction()
        except BaseException:
            await self.release()
            raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is not None or not self._committed:
                await self.rollback()
        finally:
            await self.release()
