"""Song service: catalogue queries, CRUD with top-five reconciliation, plays."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from music_ranking.db.models import Song, SongSuggestion
from music_ranking.pagination import Page, paginate
from music_ranking.ranking import TOP_FIVE_SIZE, TopFiveReconciler
from music_ranking.ranking.store import SqlSongStore
from music_ranking.youtube import normalize_url

logger = logging.getLogger(__name__)


class InvalidSongData(ValueError):
    """Raised when song input cannot be stored (e.g. not a YouTube URL)."""


class DuplicateYoutubeUrl(ValueError):
    """Raised when a canonical URL is already used by a song or suggestion."""


def reconciler_for(session: Session) -> TopFiveReconciler:
    """Build a reconciler on the sync side of an AsyncSession."""
    return TopFiveReconciler(SqlSongStore(session))


def require_canonical_url(url: str, error: type[ValueError] = InvalidSongData) -> str:
    normalized = normalize_url(url)
    if not normalized:
        raise error("Invalid YouTube URL")
    return normalized


async def ensure_url_available(
    session: AsyncSession,
    url: str,
    ignore_song_id: int | None = None,
) -> None:
    """Reject a canonical URL already stored on a suggestion or another song."""
    suggestion = await session.scalar(
        select(SongSuggestion.id).where(SongSuggestion.youtube_url == url).limit(1)
    )
    if suggestion is not None:
        raise DuplicateYoutubeUrl("A suggestion with this YouTube URL already exists")

    stmt = select(Song.id).where(Song.youtube_url == url)
    if ignore_song_id is not None:
        stmt = stmt.where(Song.id != ignore_song_id)
    song = await session.scalar(stmt.limit(1))
    if song is not None:
        raise DuplicateYoutubeUrl("A song with this YouTube URL already exists")


# === Queries ===


async def get_top_five(session: AsyncSession) -> list[Song]:
    """Songs at positions 1..5, in position order."""
    stmt = (
        select(Song)
        .where(Song.position.between(1, TOP_FIVE_SIZE))
        .order_by(Song.position, Song.id)
    )
    result = await session.scalars(stmt)
    return list(result.all())


async def get_others(session: AsyncSession, page: int = 1, per_page: int = 15) -> Page:
    """Songs outside the top five, most played first."""
    stmt = (
        select(Song)
        .where(or_(Song.position.is_(None), Song.position > TOP_FIVE_SIZE))
        .order_by(Song.plays_count.desc(), Song.id)
    )
    return await paginate(session, stmt, page, per_page)


async def search_songs(
    session: AsyncSession, query: str, page: int = 1, per_page: int = 15
) -> Page:
    """Title substring search over the whole catalogue, most played first."""
    stmt = (
        select(Song)
        .where(Song.title.icontains(query, autoescape=True))
        .order_by(Song.plays_count.desc(), Song.id)
    )
    return await paginate(session, stmt, page, per_page)


async def get_song(session: AsyncSession, song_id: int) -> Song | None:
    return await session.get(Song, song_id)


# === Mutations ===


async def create_song(session: AsyncSession, data: Mapping[str, Any]) -> Song:
    """Create a song, shifting the top five when a position 1..5 is requested.

    Args:
        session: Database session (must be in transaction)
        data: title, youtube_url, optional position and plays_count

    Returns:
        The new Song
    """
    url = require_canonical_url(data["youtube_url"])
    await ensure_url_available(session, url)

    fields = {"title": data["title"], "youtube_url": url}
    if data.get("plays_count") is not None:
        fields["plays_count"] = data["plays_count"]
    position = data.get("position")

    song = await session.run_sync(
        lambda sync_session: reconciler_for(sync_session).insert_at(fields, position)
    )
    logger.info(f"[SONGS] Created song id={song.id}, position={song.position}")
    return song


async def update_song(session: AsyncSession, song: Song, data: Mapping[str, Any]) -> Song:
    """Apply a partial update. Only keys present in ``data`` are changed."""
    if "youtube_url" in data:
        url = require_canonical_url(data["youtube_url"])
        if url != song.youtube_url:
            await ensure_url_available(session, url, ignore_song_id=song.id)
        song.youtube_url = url

    if "title" in data:
        song.title = data["title"]

    if "position" in data and data["position"] != song.position:
        old_position = song.position
        await session.run_sync(
            lambda sync_session: reconciler_for(sync_session).move_to(song.id, data["position"])
        )
        logger.info(f"[SONGS] Moved song id={song.id}: {old_position} -> {song.position}")

    await session.flush()
    return song


async def delete_song(session: AsyncSession, song: Song) -> None:
    """Delete a song; the top five is compacted if the song was in it."""
    song_id, position = song.id, song.position
    await session.run_sync(
        lambda sync_session: reconciler_for(sync_session).remove_ranked(song_id)
    )
    logger.info(f"[SONGS] Deleted song id={song_id}, position={position}")


async def play_song(session: AsyncSession, song: Song) -> Song:
    """Count one play."""
    await session.execute(
        update(Song)
        .where(Song.id == song.id)
        .values(plays_count=Song.plays_count + 1)
        .execution_options(synchronize_session=False)
    )
    await session.refresh(song)
    return song


async def update_top_five_positions(
    session: AsyncSession, positions: Mapping[int, int]
) -> None:
    """Persist a full top-five ordering (song id -> position 1..5)."""
    await session.run_sync(
        lambda sync_session: reconciler_for(sync_session).set_exact_positions(positions)
    )
    logger.info(f"[SONGS] Top five reordered: {dict(positions)}")
