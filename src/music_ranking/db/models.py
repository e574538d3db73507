"""SQLAlchemy models."""

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from music_ranking.ranking.reconciler import in_top_five
from music_ranking.youtube import PLACEHOLDER_THUMBNAIL, extract_video_id, thumbnail_url


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SuggestionStatus(str, enum.Enum):
    """State machine for song suggestions.

    PENDING: submitted by a visitor, awaiting review
    APPROVED: accepted by an admin, a song was created from it
    REJECTED: declined by an admin

    Only PENDING → APPROVED and PENDING → REJECTED are allowed.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    SuggestionStatus.PENDING: "Pendente",
    SuggestionStatus.APPROVED: "Aprovada",
    SuggestionStatus.REJECTED: "Rejeitada",
}


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class TimestampMixin:
    # Python-side defaults so values are available right after flush
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False,
    )


class YoutubeMixin:
    """Derived YouTube attributes for models with a canonical youtube_url."""

    @property
    def youtube_video_id(self) -> str | None:
        return extract_video_id(self.youtube_url)

    @property
    def youtube_thumbnail(self) -> str:
        return thumbnail_url(self.youtube_url) or PLACEHOLDER_THUMBNAIL


class User(TimestampMixin, Base):
    """Admin account allowed to manage songs and review suggestions."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User email={self.email}>"


class AccessToken(Base):
    """Personal access token issued at login.

    Only the keyed hash of the secret part is stored; the plain token
    is returned to the client once.
    """

    __tablename__ = "access_tokens"

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    name: Mapped[str] = mapped_column(
        String(64),
        default="auth-token",
        nullable=False,
    )
    token_hash: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
    )
    last_used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )


class Song(YoutubeMixin, TimestampMixin, Base):
    """Song in the catalogue.

    position 1..5 places the song in the top five. Larger positions are
    kept as-is and the song is listed with the others. No unique
    constraint on position: shifts pass through transient duplicates
    inside a single transaction.
    """

    __tablename__ = "songs"
    __table_args__ = (
        Index("ix_songs_position", "position"),
        Index("ix_songs_plays_count", "plays_count"),
        CheckConstraint("position IS NULL OR position >= 1", name="ck_songs_position"),
        CheckConstraint("plays_count >= 0", name="ck_songs_plays_count"),
    )

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    youtube_url: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    position: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )
    plays_count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default="0",
        nullable=False,
    )

    @property
    def is_top_five(self) -> bool:
        return in_top_five(self.position)

    def __repr__(self) -> str:
        return f"<Song id={self.id} position={self.position}>"


class SongSuggestion(YoutubeMixin, TimestampMixin, Base):
    """Song suggested by a visitor.

    reviewed_by and reviewed_at are set together when the suggestion
    leaves PENDING.
    """

    __tablename__ = "song_suggestions"
    __table_args__ = (
        Index("ix_song_suggestions_status", "status"),
        Index("ix_song_suggestions_reviewed_at", "reviewed_at"),
    )

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    artist: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    youtube_url: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    status: Mapped[SuggestionStatus] = mapped_column(
        Enum(SuggestionStatus),
        default=SuggestionStatus.PENDING,
        nullable=False,
    )
    suggested_by: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    suggested_by_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    suggested_by_email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    reviewed_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<SongSuggestion id={self.id} status={self.status.value}>"
