"""Test database models."""

from sqlalchemy import select, text
from sqlalchemy.orm import Session

from music_ranking.db.models import Song, SongSuggestion, SuggestionStatus, User
from music_ranking.youtube import PLACEHOLDER_THUMBNAIL


def test_create_user(db_session: Session):
    """Test creating a user."""
    user = User(name="Admin", email="admin@example.com", password_hash="x")
    db_session.add(user)
    db_session.commit()

    result = db_session.execute(select(User)).scalar_one()
    assert result.email == "admin@example.com"
    assert result.id is not None
    assert result.created_at is not None
    assert result.updated_at is not None


def test_create_song_defaults(db_session: Session):
    """Test a new song is unranked with no plays."""
    song = Song(title="Chalana", youtube_url="https://www.youtube.com/watch?v=zchalana123")
    db_session.add(song)
    db_session.commit()

    result = db_session.execute(select(Song)).scalar_one()
    assert result.position is None
    assert result.plays_count == 0
    assert result.is_top_five is False


def test_song_is_top_five():
    """Positions 1..5 are the top five, 6 and above are not."""
    assert Song(position=1).is_top_five is True
    assert Song(position=5).is_top_five is True
    assert Song(position=6).is_top_five is False


def test_song_youtube_properties():
    """Test derived video id and thumbnail."""
    song = Song(youtube_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ")
    assert song.youtube_video_id == "dQw4w9WgXcQ"
    assert song.youtube_thumbnail == "https://img.youtube.com/vi/dQw4w9WgXcQ/hqdefault.jpg"


def test_thumbnail_placeholder_for_bad_url():
    song = Song(youtube_url="https://vimeo.com/123456789")
    assert song.youtube_video_id is None
    assert song.youtube_thumbnail == PLACEHOLDER_THUMBNAIL


def test_suggestion_defaults_to_pending(db_session: Session):
    """Test suggestion status default and empty review fields."""
    suggestion = SongSuggestion(title="Chalana", youtube_url="https://www.youtube.com/watch?v=zchalana123")
    db_session.add(suggestion)
    db_session.commit()

    result = db_session.execute(select(SongSuggestion)).scalar_one()
    assert result.status == SuggestionStatus.PENDING
    assert result.reviewed_by is None
    assert result.reviewed_at is None


def test_suggestion_status_values():
    """Test suggestion status enum values and labels."""
    assert SuggestionStatus.PENDING.value == "pending"
    assert SuggestionStatus.APPROVED.value == "approved"
    assert SuggestionStatus.REJECTED.value == "rejected"
    assert SuggestionStatus.APPROVED.label == "Aprovada"


def test_plays_count_server_default(db_session: Session):
    """Rows inserted outside the ORM start with zero plays."""
    db_session.execute(
        text(
            "INSERT INTO songs (title, youtube_url) "
            "VALUES ('Raw', 'https://www.youtube.com/watch?v=raw00000001')"
        )
    )
    assert db_session.scalar(select(Song.plays_count)) == 0
