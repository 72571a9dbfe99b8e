"""
Database session management.

This module provides utilities for creating and managing database sessions
using async SQLAlchemy with PostgreSQL (asyncpg) or SQLite (aiosqlite).
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from budget_server.core.config import settings
from budget_server.core.exceptions import BudgetServerError
from budget_server.core.logging import logger


def build_engine_options() -> dict:
    """Engine keyword arguments for the configured database backend."""
    options = {"echo": settings.debug, "future": True}
    if not settings.database.is_sqlite:
        options.update(
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.max_overflow,
            pool_pre_ping=True,
            pool_recycle=settings.database.pool_recycle,
        )
    return options


# Create async engine
engine = create_async_engine(settings.database.url, **build_engine_options())

# Create async session factory
AsyncSessionLocal = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session scoped to one request.

    The session is committed when the endpoint finishes without raising and
    rolled back on any failure, so every handler runs as a single unit of
    work.

    Yields:
        AsyncSession: Database session
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except BudgetServerError:
            await session.rollback()
            raise
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_tables() -> None:
    """Create all tables that do not exist yet."""
    from budget_server.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")
