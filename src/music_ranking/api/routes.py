"""FastAPI routes: songs, suggestions, health."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query

from music_ranking.api.deps import CurrentAdmin, DbSession
from music_ranking.api.schemas import (
    PositionsUpdate,
    ReviewRequest,
    SongCreate,
    SongUpdate,
    SuggestionCreate,
    ok,
    page_of,
    song_data,
    suggestion_data,
)
from music_ranking.config import get_settings
from music_ranking.db.models import Song, SongSuggestion, SuggestionStatus
from music_ranking.songs import service as songs
from music_ranking.suggestions import service as suggestions

router = APIRouter()
api_router = APIRouter(prefix="/api/v1")

PageNumber = Annotated[int, Query(ge=1)]
PerPage = Annotated[int | None, Query(ge=1, le=100)]


def _per_page(per_page: int | None) -> int:
    return per_page or get_settings().DEFAULT_PER_PAGE


async def _song_or_404(session, song_id: int) -> Song:
    song = await songs.get_song(session, song_id)
    if not song:
        raise HTTPException(status_code=404, detail="Música não encontrada.")
    return song


async def _suggestion_or_404(session, suggestion_id: int) -> SongSuggestion:
    suggestion = await suggestions.get_suggestion(session, suggestion_id)
    if not suggestion:
        raise HTTPException(status_code=404, detail="Sugestão não encontrada.")
    return suggestion


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


# === Songs ===


@api_router.get("/songs", tags=["songs"])
async def list_songs(
    session: DbSession,
    top_five_only: bool = False,
    search: Annotated[str | None, Query(max_length=255)] = None,
    page: PageNumber = 1,
    per_page: PerPage = None,
) -> dict:
    """Top five only, a title search, or the paginated songs outside the top five."""
    if top_five_only:
        top_five = await songs.get_top_five(session)
        return ok(data=[song_data(song) for song in top_five])

    if search:
        result = await songs.search_songs(session, search, page, _per_page(per_page))
    else:
        result = await songs.get_others(session, page, _per_page(per_page))
    return page_of(result, song_data)


@api_router.get("/songs/top-five", tags=["songs"])
async def top_five(session: DbSession) -> dict:
    top_five = await songs.get_top_five(session)
    return ok(data=[song_data(song) for song in top_five])


# Declared before /songs/{song_id} so "positions" is not read as an id
@api_router.put("/songs/positions", tags=["songs"])
async def update_positions(body: PositionsUpdate, session: DbSession, _: CurrentAdmin) -> dict:
    """Persist a full drag-and-drop ordering of the top five."""
    await songs.update_top_five_positions(session, body.positions)
    return ok(message="Posições atualizadas com sucesso.")


@api_router.get("/songs/{song_id}", tags=["songs"])
async def show_song(song_id: int, session: DbSession) -> dict:
    song = await _song_or_404(session, song_id)
    return ok(data=song_data(song))


@api_router.post("/songs/{song_id}/play", tags=["songs"])
async def play_song(song_id: int, session: DbSession) -> dict:
    song = await _song_or_404(session, song_id)
    song = await songs.play_song(session, song)
    return ok(message="Reprodução contabilizada.", data=song_data(song))


@api_router.post("/songs", status_code=201, tags=["songs"])
async def create_song(body: SongCreate, session: DbSession, _: CurrentAdmin) -> dict:
    song = await songs.create_song(session, body.model_dump())
    return ok(message="Música criada com sucesso.", data=song_data(song))


@api_router.api_route("/songs/{song_id}", methods=["PUT", "PATCH"], tags=["songs"])
async def update_song(
    song_id: int, body: SongUpdate, session: DbSession, _: CurrentAdmin
) -> dict:
    song = await _song_or_404(session, song_id)
    song = await songs.update_song(session, song, body.model_dump(exclude_unset=True))
    return ok(message="Música atualizada com sucesso.", data=song_data(song))


@api_router.delete("/songs/{song_id}", tags=["songs"])
async def delete_song(song_id: int, session: DbSession, _: CurrentAdmin) -> dict:
    song = await _song_or_404(session, song_id)
    await songs.delete_song(session, song)
    return ok(message="Música excluída com sucesso.")


# === Suggestions ===


@api_router.post("/suggestions", status_code=201, tags=["suggestions"])
async def create_suggestion(body: SuggestionCreate, session: DbSession) -> dict:
    """Public submission form."""
    suggestion = await suggestions.create_suggestion(session, body.model_dump())
    return ok(message="Sugestão enviada com sucesso!", data=suggestion_data(suggestion))


@api_router.get("/suggestions", tags=["suggestions"])
async def list_suggestions(
    session: DbSession,
    _: CurrentAdmin,
    status: SuggestionStatus | None = None,
    search: Annotated[str | None, Query(max_length=255)] = None,
    page: PageNumber = 1,
    per_page: PerPage = None,
) -> dict:
    if search:
        result = await suggestions.search_suggestions(session, search, page, _per_page(per_page))
    else:
        result = await suggestions.list_suggestions(
            session, page, _per_page(per_page), status=status
        )
    return page_of(result, suggestion_data)


@api_router.get("/suggestions/pending", tags=["suggestions"])
async def pending_suggestions(
    session: DbSession,
    _: CurrentAdmin,
    page: PageNumber = 1,
    per_page: PerPage = None,
) -> dict:
    result = await suggestions.list_pending(session, page, _per_page(per_page))
    return page_of(result, suggestion_data)


@api_router.get("/suggestions/stats", tags=["suggestions"])
async def suggestion_stats(session: DbSession, _: CurrentAdmin) -> dict:
    return ok(data=await suggestions.get_suggestion_stats(session))


@api_router.get("/suggestions/{suggestion_id}", tags=["suggestions"])
async def show_suggestion(suggestion_id: int, session: DbSession, _: CurrentAdmin) -> dict:
    suggestion = await _suggestion_or_404(session, suggestion_id)
    return ok(data=suggestion_data(suggestion))


@api_router.api_route("/suggestions/{suggestion_id}", methods=["PUT", "PATCH"], tags=["suggestions"])
async def review_suggestion(
    suggestion_id: int,
    body: ReviewRequest,
    session: DbSession,
    current: CurrentAdmin,
) -> dict:
    """Approve (creating an unranked song) or reject a pending suggestion."""
    suggestion = await _suggestion_or_404(session, suggestion_id)

    if body.status == "approve":
        song = await suggestions.approve_suggestion(session, suggestion, current.user.id)
        return ok(
            message="Sugestão aprovada com sucesso! A música foi adicionada ao catálogo.",
            data={"suggestion": suggestion_data(suggestion), "song": song_data(song)},
        )

    await suggestions.reject_suggestion(session, suggestion, current.user.id)
    return ok(message="Sugestão rejeitada.", data=suggestion_data(suggestion))
