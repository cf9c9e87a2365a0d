"""Database connection and session management"""

import logging
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from taskflow.config import settings

logger = logging.getLogger(__name__)

# Placeholder used when DATABASE_URL is missing outside development; the first
# query fails instead of the import.
FALLBACK_DATABASE_URL = "postgresql://taskflow@localhost:5432/taskflow"

if not settings.database_url:
    logger.warning("DATABASE_URL not set, database access will fail at runtime")

# Convert postgresql:// to postgresql+asyncpg:// for async support
ASYNC_DATABASE_URL = (settings.database_url or FALLBACK_DATABASE_URL).replace(
    "postgresql://", "postgresql+asyncpg://"
)

engine_options = {
    "echo": settings.environment == "development" and settings.log_level == "DEBUG",
    "pool_pre_ping": True,
}
if not ASYNC_DATABASE_URL.startswith("sqlite"):
    engine_options["pool_size"] = settings.database_pool_size
    engine_options["max_overflow"] = settings.database_max_overflow

# Async engine (for application usage)
async_engine = create_async_engine(ASYNC_DATABASE_URL, **engine_options)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Base class for all models
Base = declarative_base()


# Dependency for FastAPI to get database session
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session.

    Usage:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            result = await db.execute(select(Item))
            return result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
