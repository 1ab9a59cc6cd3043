"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-characters-long")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("OMDB_API_KEY", "test-omdb-key")

from movie_catalog.database import Base, get_db
from movie_catalog.main import app
from movie_catalog.models import Movie  # noqa: F401 - registers the table
from movie_catalog.utils.security import create_access_token

SHAWSHANK_OMDB = {
    "Title": "The Shawshank Redemption",
    "Year": "1994",
    "Rated": "R",
    "Released": "14 Oct 1994",
    "Runtime": "142 min",
    "Genre": "Drama",
    "Director": "Frank Darabont",
    "Writer": "Stephen King, Frank Darabont",
    "Actors": "Tim Robbins, Morgan Freeman, Bob Gunton",
    "Plot": "Over the course of several years, two convicts form a friendship.",
    "Poster": "https://m.media-amazon.com/images/M/shawshank.jpg",
    "Ratings": [{"Source": "Internet Movie Database", "Value": "9.3/10"}],
    "imdbRating": "9.3",
    "imdbID": "tt0111161",
    "BoxOffice": "N/A",
    "Response": "True",
}

OMDB_NOT_FOUND = {"Response": "False", "Error": "Incorrect IMDb ID."}


def make_movie_payload(**overrides) -> dict:
    """Build a valid direct-creation payload in the API's camelCase form."""
    payload = {
        "title": "Fight Club",
        "imdbId": "tt0137523",
        "year": 1999,
        "rated": "R",
        "released": "15 Oct 1999",
        "runtime": "139 min",
        "genre": "Drama",
        "director": "David Fincher",
        "writer": "Chuck Palahniuk, Jim Uhls",
        "actors": "Brad Pitt, Edward Norton",
        "plot": "An insomniac office worker and a soap maker form an underground fight club.",
        "poster": "https://m.media-amazon.com/images/M/fightclub.jpg",
        "imdbRating": 8.8,
        "boxOffice": "$37,030,102",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Session factory bound to a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """A database session for service and repository tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints against the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Authorization header carrying an admin token."""
    token = create_access_token({"sub": "admin-1", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def viewer_headers() -> dict[str, str]:
    """Authorization header carrying a non-admin token."""
    token = create_access_token({"sub": "viewer-1", "role": "viewer"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def movie_payload():
    """Factory for valid direct-creation payloads."""
    return make_movie_payload


@pytest.fixture
def omdb_found() -> dict:
    """OMDb lookup response for The Shawshank Redemption."""
    return dict(SHAWSHANK_OMDB)


@pytest.fixture
def omdb_not_found() -> dict:
    """OMDb lookup response for an unknown IMDb id."""
    return dict(OMDB_NOT_FOUND)
