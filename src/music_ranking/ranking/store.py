"""SongStore backed by a synchronous SQLAlchemy session.

Async callers run the reconciler through ``AsyncSession.run_sync`` so the
whole reconciliation shares the request transaction.
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from music_ranking.db.models import Song
from music_ranking.ranking.reconciler import TOP_FIVE_SIZE, SongNotFound


class SqlSongStore:
    """SongStore over the songs table."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, song_id: int) -> Song:
        song = self.session.get(Song, song_id)
        if song is None:
            raise SongNotFound(song_id)
        return song

    def get_id(self, song: Song) -> int:
        return song.id

    def get_position(self, song: Song) -> int | None:
        return song.position

    def get_at_position(self, position: int) -> Song | None:
        stmt = select(Song).where(Song.position == position).order_by(Song.id).limit(1)
        return self.session.scalars(stmt).first()

    def set_position(self, song: Song, position: int | None) -> None:
        song.position = position
        self.session.flush()

    def list_top_five(self) -> list[Song]:
        stmt = (
            select(Song)
            .where(Song.position.between(1, TOP_FIVE_SIZE))
            .order_by(Song.position, Song.id)
        )
        return list(self.session.scalars(stmt).all())

    def list_ranked(self, max_position: int) -> list[Song]:
        stmt = (
            select(Song)
            .where(Song.position.between(1, max_position))
            .order_by(Song.position, Song.id)
        )
        return list(self.session.scalars(stmt).all())

    def create(self, fields: Mapping[str, Any], position: int | None) -> Song:
        song = Song(**fields, position=position)
        self.session.add(song)
        self.session.flush()
        return song

    def delete(self, song: Song) -> None:
        self.session.delete(song)
        self.session.flush()
