"""Shared fixtures: a file-backed SQLite app with one admin account."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from music_ranking.api.app import create_app
from music_ranking.crypto import hash_password
from music_ranking.db.models import Base, User
from music_ranking.db.session import get_db

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "password123"


@pytest.fixture
def db_session():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(tmp_path):
    """TestClient over a fresh database holding only the admin user."""
    db_file = tmp_path / "test.db"

    sync_engine = create_engine(f"sqlite:///{db_file}")
    Base.metadata.create_all(sync_engine)
    with Session(sync_engine) as session:
        session.add(
            User(
                name="Administrador",
                email=ADMIN_EMAIL,
                password_hash=hash_password(ADMIN_PASSWORD),
            )
        )
        session.commit()
    sync_engine.dispose()

    # NullPool: aiosqlite connections must not outlive the TestClient loop
    async_engine = create_async_engine(f"sqlite+aiosqlite:///{db_file}", poolclass=NullPool)
    factory = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with factory() as session:
            async with session.begin():
                yield session

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token(client: TestClient) -> str:
    response = client.post(
        "/api/v1/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]["token"]


@pytest.fixture
def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def video_url(n: int) -> str:
    """Distinct valid watch URL for the n-th test song."""
    return f"https://www.youtube.com/watch?v=song{n:07d}"


@pytest.fixture
def make_song(client: TestClient, auth_headers: dict):
    """Create a song through the API and return its JSON resource."""
    counter = {"n": 0}

    def _make(title: str, position: int | None = None, **extra) -> dict:
        counter["n"] += 1
        body = {"title": title, "youtube_url": video_url(counter["n"]), **extra}
        if position is not None:
            body["position"] = position
        response = client.post("/api/v1/songs", json=body, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make
