"""Sample data for local development."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from music_ranking.auth import create_user
from music_ranking.config import get_settings
from music_ranking.db.models import User
from music_ranking.songs.service import create_song
from music_ranking.suggestions.service import create_suggestion

logger = logging.getLogger(__name__)

SAMPLE_SONGS = [
    {"title": "Pagode em Brasília", "youtube_url": "https://www.youtube.com/watch?v=qxVZQrNr5Hs", "position": 1, "plays_count": 1500000},
    {"title": "Rei do Gado", "youtube_url": "https://www.youtube.com/watch?v=5hxmzWEyHJQ", "position": 2, "plays_count": 1350000},
    {"title": "Boi Soberano", "youtube_url": "https://www.youtube.com/watch?v=VGMYLwQyXuE", "position": 3, "plays_count": 1200000},
    {"title": "Festa do Peão", "youtube_url": "https://www.youtube.com/watch?v=UqDwgYt_IhI", "position": 4, "plays_count": 1100000},
    {"title": "Cabocla Teresa", "youtube_url": "https://youtu.be/dQw4w9WgXcQ", "position": 5, "plays_count": 1000000},
    {"title": "Moda da Pinga", "youtube_url": "https://www.youtube.com/watch?v=abc123defgh", "plays_count": 950000},
    {"title": "Tristeza do Jeca", "youtube_url": "https://www.youtube.com/watch?v=def456ghijk", "plays_count": 900000},
    {"title": "Viola Chorando", "youtube_url": "https://www.youtube.com/watch?v=ghi789jklmn", "plays_count": 850000},
    {"title": "Saudade da Minha Terra", "youtube_url": "https://www.youtube.com/watch?v=jkl012mnopq", "plays_count": 800000},
    {"title": "Chico Mineiro", "youtube_url": "https://www.youtube.com/watch?v=stu901vwxyz", "plays_count": 650000},
]

SAMPLE_SUGGESTIONS = [
    {"title": "Chalana", "youtube_url": "https://www.youtube.com/watch?v=zchalana123", "suggested_by": "João da Silva"},
    {"title": "Marvada Pinga", "youtube_url": "https://m.youtube.com/watch?v=marvada0123", "suggested_by": "Ana Oliveira"},
    {"title": "Beijinho Doce", "youtube_url": "https://youtu.be/beijinho345", "suggested_by": "Pedro Lima"},
]


async def seed_database(session: AsyncSession) -> bool:
    """Create the admin account and sample catalogue on an empty database.

    Returns:
        True if data was inserted, False if users already existed.
    """
    users = await session.scalar(select(func.count()).select_from(User))
    if users:
        logger.info("Database already seeded")
        return False

    settings = get_settings()
    await create_user(session, settings.ADMIN_NAME, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)

    for data in SAMPLE_SONGS:
        await create_song(session, data)
    for data in SAMPLE_SUGGESTIONS:
        await create_suggestion(session, data)

    logger.info(
        f"Seeded admin {settings.ADMIN_EMAIL}, {len(SAMPLE_SONGS)} songs, "
        f"{len(SAMPLE_SUGGESTIONS)} suggestions"
    )
    return True
