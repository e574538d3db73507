"""Development entrypoint: creates tables, seeds sample data, serves the API."""

import asyncio
import logging

import uvicorn

from music_ranking.api.app import create_app
from music_ranking.config import get_settings
from music_ranking.db.models import Base
from music_ranking.db.session import async_session_factory, engine
from music_ranking.seed import seed_database


async def prepare_database() -> None:
    # Create tables on startup (dev only, production uses Alembic)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        async with session.begin():
            await seed_database(session)

    # Connections are bound to this loop; uvicorn runs its own
    await engine.dispose()


def main() -> None:
    """Run the API with auto-created tables for local development."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )
    logger = logging.getLogger(__name__)

    settings = get_settings()
    logger.info(f"Preparing {settings.ENV} database")
    asyncio.run(prepare_database())

    logger.info("Starting API on http://127.0.0.1:8000 ...")
    uvicorn.run(create_app(), host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
