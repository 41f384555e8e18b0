"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support. The default engine is an embedded
SQLite file; any async URL (e.g. PostgreSQL via asyncpg) works the same.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from tracker.app.core.config import settings

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


async def init_db(bind=None):
    """
    Create the parcel table if it does not exist yet.
    
    No migrations are performed; the schema is fixed.
    """
    # Register the model with Base before create_all
    from tracker.app.models.parcel import Parcel  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    """
    Yields an async database session and ensures it's properly closed.
    
    The store never opens or closes sessions itself; callers own them.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
