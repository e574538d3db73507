"""Database session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from music_ranking.config import Settings, get_settings

settings = get_settings()


def get_async_database_url(url: str) -> str:
    """Convert DATABASE_URL to the async driver the app ships with.

    - postgresql:// or postgres:// -> postgresql+asyncpg://
    - sqlite:// -> sqlite+aiosqlite://
    """
    for prefix in ("postgresql://", "postgres://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url.removeprefix(prefix)
    if url.startswith("sqlite://"):
        return "sqlite+aiosqlite://" + url.removeprefix("sqlite://")
    return url


def engine_options(settings: Settings) -> dict[str, Any]:
    """Keyword arguments for create_async_engine on the configured backend."""
    options: dict[str, Any] = {"echo": settings.SQL_ECHO}
    if not get_async_database_url(settings.DATABASE_URL).startswith("sqlite"):
        # Hosted Postgres drops idle connections
        options.update(pool_pre_ping=True, pool_size=settings.DB_POOL_SIZE)
    return options


engine = create_async_engine(
    get_async_database_url(settings.DATABASE_URL),
    **engine_options(settings),
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session wrapped in one transaction per request.

    Reconciler writes made through run_sync commit or roll back together
    with the rest of the request.
    """
    async with async_session_factory() as session:
        async with session.begin():
            yield session
