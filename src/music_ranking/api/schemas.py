"""Request bodies and JSON resources for the HTTP API."""

import re
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
)

from music_ranking.db.models import SuggestionStatus
from music_ranking.pagination import Page
from music_ranking.youtube import is_valid_url

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

INVALID_YOUTUBE_URL = "A URL deve ser um link válido do YouTube."


def _check_youtube_url(value: str) -> str:
    if not is_valid_url(value):
        raise ValueError(INVALID_YOUTUBE_URL)
    return value


def _check_email(value: str | None) -> str | None:
    if value is not None and not _EMAIL_PATTERN.match(value):
        raise ValueError("O e-mail deve ser um endereço válido.")
    return value


YoutubeUrl = Annotated[str, Field(max_length=2048), AfterValidator(_check_youtube_url)]
Email = Annotated[str, Field(max_length=255), AfterValidator(_check_email)]


# === Requests ===


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=8)


class SongCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    youtube_url: YoutubeUrl
    position: int | None = Field(default=None, ge=1, le=1000)


class SongUpdate(BaseModel):
    """Partial update: omitted fields are left alone, ``position: null`` unranks."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    youtube_url: YoutubeUrl | None = None
    position: int | None = Field(default=None, ge=1, le=1000)

    @field_validator("title", "youtube_url")
    @classmethod
    def not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Campo obrigatório.")
        return value


class PositionsUpdate(BaseModel):
    """Song id -> position for the whole top five."""

    positions: dict[int, Annotated[int, Field(ge=1, le=5)]]


class SuggestionCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    artist: str | None = Field(default=None, max_length=255)
    youtube_url: YoutubeUrl
    suggested_by: str | None = Field(default=None, max_length=255)
    suggested_by_name: str | None = Field(default=None, max_length=255)
    suggested_by_email: Email | None = None


class ReviewRequest(BaseModel):
    status: Literal["approve", "reject"]


# === Resources ===


class _Resource(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", "reviewed_at", check_fields=False)
    def format_timestamp(self, value: datetime | None) -> str | None:
        return value.strftime(TIMESTAMP_FORMAT) if value else None


class UserResource(_Resource):
    id: int
    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SongResource(_Resource):
    id: int
    title: str
    youtube_url: str
    youtube_video_id: str | None
    youtube_thumbnail: str
    position: int | None
    plays_count: int
    is_top_five: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SuggestionResource(_Resource):
    id: int
    title: str
    artist: str | None
    youtube_url: str
    youtube_video_id: str | None
    youtube_thumbnail: str
    status: SuggestionStatus
    suggested_by: str | None
    suggested_by_name: str | None
    suggested_by_email: str | None
    reviewed_by: int | None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field
    @property
    def status_label(self) -> str:
        return self.status.label


# === Envelope ===


def ok(data: Any = None, message: str | None = None, meta: dict | None = None) -> dict:
    """Success envelope shared by every endpoint."""
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if meta is not None:
        body["meta"] = meta
    return body


def fail(message: str, errors: dict | None = None) -> dict:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


def song_data(song) -> dict:
    return SongResource.model_validate(song).model_dump(mode="json")


def suggestion_data(suggestion) -> dict:
    return SuggestionResource.model_validate(suggestion).model_dump(mode="json")


def user_data(user) -> dict:
    return UserResource.model_validate(user).model_dump(mode="json")


def page_of(page: Page, serialize) -> dict:
    return ok(data=[serialize(item) for item in page.items], meta=page.meta())
