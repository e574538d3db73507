"""Suggestion service: public submissions and the admin review workflow."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from music_ranking.db.models import Song, SongSuggestion, SuggestionStatus, utcnow
from music_ranking.pagination import Page, paginate
from music_ranking.songs.service import (
    ensure_url_available,
    reconciler_for,
    require_canonical_url,
)

logger = logging.getLogger(__name__)


class InvalidSuggestion(ValueError):
    """Raised for invalid submissions and reviews of non-pending suggestions."""


async def create_suggestion(session: AsyncSession, data: Mapping[str, Any]) -> SongSuggestion:
    """Store a visitor suggestion as PENDING.

    The URL is canonicalized first so duplicates are detected whatever
    shape of YouTube link was submitted.
    """
    url = require_canonical_url(data["youtube_url"], error=InvalidSuggestion)
    await ensure_url_available(session, url)

    suggestion = SongSuggestion(
        title=data["title"],
        artist=data.get("artist"),
        youtube_url=url,
        suggested_by=data.get("suggested_by"),
        suggested_by_name=data.get("suggested_by_name"),
        suggested_by_email=data.get("suggested_by_email"),
        status=SuggestionStatus.PENDING,
    )
    session.add(suggestion)
    await session.flush()

    logger.info(f"[SUGGESTIONS] New suggestion id={suggestion.id}")
    return suggestion


def _record_review(
    suggestion: SongSuggestion, status: SuggestionStatus, reviewer_id: int
) -> None:
    if suggestion.status != SuggestionStatus.PENDING:
        action = "approved" if status == SuggestionStatus.APPROVED else "rejected"
        raise InvalidSuggestion(f"Only pending suggestions can be {action}")

    suggestion.status = status
    suggestion.reviewed_by = reviewer_id
    suggestion.reviewed_at = utcnow()


async def approve_suggestion(
    session: AsyncSession, suggestion: SongSuggestion, reviewer_id: int
) -> Song:
    """Approve a pending suggestion and add it to the catalogue, unranked.

    Returns:
        The newly created Song (its id is unrelated to the suggestion's)
    """
    _record_review(suggestion, SuggestionStatus.APPROVED, reviewer_id)

    fields = {
        "title": suggestion.title,
        "youtube_url": suggestion.youtube_url,
        "plays_count": 0,
    }
    song = await session.run_sync(
        lambda sync_session: reconciler_for(sync_session).insert_at(fields, None)
    )
    logger.info(
        f"[SUGGESTIONS] Approved suggestion id={suggestion.id} by user={reviewer_id}, "
        f"song id={song.id}"
    )
    return song


async def reject_suggestion(
    session: AsyncSession, suggestion: SongSuggestion, reviewer_id: int
) -> SongSuggestion:
    _record_review(suggestion, SuggestionStatus.REJECTED, reviewer_id)
    await session.flush()
    logger.info(f"[SUGGESTIONS] Rejected suggestion id={suggestion.id} by user={reviewer_id}")
    return suggestion


# === Queries ===


async def get_suggestion(session: AsyncSession, suggestion_id: int) -> SongSuggestion | None:
    return await session.get(SongSuggestion, suggestion_id)


async def list_suggestions(
    session: AsyncSession,
    page: int = 1,
    per_page: int = 15,
    status: SuggestionStatus | None = None,
) -> Page:
    """All suggestions, newest first, optionally filtered by status."""
    stmt = select(SongSuggestion)
    if status is not None:
        stmt = stmt.where(SongSuggestion.status == status)
    stmt = stmt.order_by(SongSuggestion.created_at.desc(), SongSuggestion.id.desc())
    return await paginate(session, stmt, page, per_page)


async def list_pending(session: AsyncSession, page: int = 1, per_page: int = 15) -> Page:
    return await list_suggestions(session, page, per_page, status=SuggestionStatus.PENDING)


async def search_suggestions(
    session: AsyncSession, query: str, page: int = 1, per_page: int = 15
) -> Page:
    stmt = (
        select(SongSuggestion)
        .where(SongSuggestion.title.icontains(query, autoescape=True))
        .order_by(SongSuggestion.created_at.desc(), SongSuggestion.id.desc())
    )
    return await paginate(session, stmt, page, per_page)


async def get_recent_approved(session: AsyncSession, limit: int = 10) -> list[SongSuggestion]:
    stmt = (
        select(SongSuggestion)
        .where(SongSuggestion.status == SuggestionStatus.APPROVED)
        .order_by(SongSuggestion.reviewed_at.desc())
        .limit(limit)
    )
    result = await session.scalars(stmt)
    return list(result.all())


async def get_suggestion_stats(session: AsyncSession) -> dict[str, int]:
    """Count suggestions per status (every status is present, zero if unused)."""
    stmt = select(SongSuggestion.status, func.count()).group_by(SongSuggestion.status)
    result = await session.execute(stmt)
    counts = {status.value: 0 for status in SuggestionStatus}
    for status, count in result.all():
        counts[status.value] = count
    return counts
