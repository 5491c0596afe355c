"""Database engine and session configuration."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Register all models with SQLAlchemy (required for relationship resolution)
import photoprint.models  # noqa: F401
from photoprint.config import settings


def _engine_options(database_url: str) -> dict[str, Any]:
    """Pool settings for server databases; SQLite manages its own pool."""
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_pre_ping": True,  # Verify connections before use
        "pool_recycle": 300,  # Recycle connections after 5 minutes
    }


engine = create_async_engine(
    settings.database_url,
    echo=False,  # SQL logging controlled via structlog configuration
    future=True,
    **_engine_options(settings.database_url),
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """Dependency that provides an async database session."""
    async with async_session_maker() as session:
        yield session


async def dispose_engine() -> None:
    """Dispose of the engine and release all connections.

    Should be called during application shutdown.
    """
    await engine.dispose()
