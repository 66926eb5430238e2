"""Database session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fieldplan.config import Settings, get_settings


def engine_options(settings: Settings) -> dict[str, Any]:
    """
    Keyword arguments for the async engine.

    SQLite (local runs, throwaway databases) uses SQLAlchemy's default pool;
    Postgres gets a sized pool with pre-ping, plus SSL when the URL asks for it.
    """
    options: dict[str, Any] = {"echo": settings.debug}
    if settings.database_url.startswith("sqlite"):
        return options
    options.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
    if settings.database_requires_ssl:
        options["connect_args"] = {"ssl": "require"}
    return options


settings = get_settings()

engine = create_async_engine(settings.database_url, **engine_options(settings))

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
