"""Tests for the SQL-backed song store driven by the reconciler."""

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from music_ranking.db.models import Song
from music_ranking.ranking import SongNotFound, TopFiveReconciler
from music_ranking.ranking.store import SqlSongStore


def add_song(session: Session, n: int, position: int | None = None) -> Song:
    song = Song(
        title=f"S{n}",
        youtube_url=f"https://www.youtube.com/watch?v=song{n:07d}",
        position=position,
    )
    session.add(song)
    session.flush()
    return song


def ranks(session: Session) -> dict[str, int | None]:
    return {song.title: song.position for song in session.scalars(select(Song))}


@pytest.fixture
def reconciler(db_session: Session) -> TopFiveReconciler:
    return TopFiveReconciler(SqlSongStore(db_session))


@pytest.fixture
def full_top_five(db_session: Session) -> list[Song]:
    return [add_song(db_session, n, n) for n in range(1, 6)]


class TestSqlSongStore:
    """Store queries."""

    def test_get_missing_raises(self, db_session: Session):
        with pytest.raises(SongNotFound):
            SqlSongStore(db_session).get(404)

    def test_list_top_five_skips_outside(self, db_session: Session):
        add_song(db_session, 1, 2)
        add_song(db_session, 2, None)
        add_song(db_session, 3, 6)
        add_song(db_session, 4, 1)
        store = SqlSongStore(db_session)
        assert [s.title for s in store.list_top_five()] == ["S4", "S1"]

    def test_list_ranked_bounded_by_position(self, db_session: Session, full_top_five):
        add_song(db_session, 6, 6)
        add_song(db_session, 7, None)
        add_song(db_session, 8, 9)
        store = SqlSongStore(db_session)
        assert [s.title for s in store.list_ranked(6)] == ["S1", "S2", "S3", "S4", "S5", "S6"]
        assert len(store.list_ranked(5)) == 5

    def test_get_at_position(self, db_session: Session, full_top_five):
        store = SqlSongStore(db_session)
        assert store.get_at_position(3).title == "S3"
        assert store.get_at_position(6) is None

    def test_create_sets_fields(self, db_session: Session):
        song = SqlSongStore(db_session).create(
            {"title": "New", "youtube_url": "https://www.youtube.com/watch?v=song0000099"}, 2
        )
        assert song.id is not None
        assert song.position == 2
        assert song.plays_count == 0
        assert song.created_at is not None


class TestReconcilerOnDatabase:
    """Cascading shift and compaction persisted through the session."""

    def test_insert_at_top(self, db_session: Session, reconciler, full_top_five):
        reconciler.insert_at(
            {"title": "S6", "youtube_url": "https://www.youtube.com/watch?v=song0000006"}, 1
        )
        assert ranks(db_session) == {"S1": 2, "S2": 3, "S3": 4, "S4": 5, "S5": 6, "S6": 1}

    def test_move_within_top_five(self, db_session: Session, reconciler, full_top_five):
        reconciler.move_to(full_top_five[3].id, 1)
        assert ranks(db_session) == {"S4": 1, "S1": 2, "S2": 3, "S3": 4, "S5": 6}

    def test_delete_pulls_overflow_back(self, db_session: Session, reconciler, full_top_five):
        new = reconciler.insert_at(
            {"title": "S6", "youtube_url": "https://www.youtube.com/watch?v=song0000006"}, 2
        )
        reconciler.remove_ranked(new.id)
        assert ranks(db_session) == {"S1": 1, "S2": 2, "S3": 3, "S4": 4, "S5": 5}

    def test_delete_keeps_far_ranked_song(self, db_session: Session, reconciler):
        first = add_song(db_session, 1, 1)
        add_song(db_session, 2, 2)
        add_song(db_session, 50, 50)
        reconciler.remove_ranked(first.id)
        assert ranks(db_session) == {"S2": 1, "S50": 50}

    def test_delete_unranked_keeps_positions(self, db_session: Session, reconciler, full_top_five):
        extra = add_song(db_session, 7, None)
        reconciler.remove_ranked(extra.id)
        assert ranks(db_session) == {"S1": 1, "S2": 2, "S3": 3, "S4": 4, "S5": 5}

    def test_set_exact_positions(self, db_session: Session, reconciler, full_top_five):
        extra = add_song(db_session, 7, None)
        ids = [extra.id] + [song.id for song in full_top_five[:4]]
        reconciler.set_exact_positions({song_id: n for n, song_id in enumerate(ids, start=1)})
        assert ranks(db_session) == {"S7": 1, "S1": 2, "S2": 3, "S3": 4, "S4": 5, "S5": None}
