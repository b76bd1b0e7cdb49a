"""
Database connection configuration using SQLAlchemy 2.0 async.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from ibge_api.config.settings import Settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database URL.

    SQLite (used by the test suite) does not accept pool sizing arguments.
    """
    if settings.is_sqlite:
        return create_async_engine(settings.database_url, echo=settings.database_echo)

    return create_async_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before using them
        echo=settings.database_echo,
    )


class Database:
    """
    Owns the engine and session factory for one application instance.

    Built once at startup from ``Settings`` and stored on ``app.state``.
    """

    def __init__(self, settings: Settings):
        self.engine: AsyncEngine = create_engine_from_settings(settings)
        self.session_maker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Async context manager for database sessions.

        Usage:
            async with database.session() as session:
                result = await session.execute(select(Model))
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def init_db(self) -> None:
        """
        Initialize the database by creating all tables.
        Should be called on application startup.
        """
        # Models must be registered on Base.metadata before create_all
        import ibge_api.database.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """
        Close the database connection.
        Should be called on application shutdown.
        """
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            repo = ItemRepository(db)
            return await repo.get_all()
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
