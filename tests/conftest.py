"""
pytest Fixtures for Catalog Tests

This file contains shared fixtures used across all test files.

FIXTURE SCOPES USED HERE:
- function (default): New database, store and client per test

For database tests, each test gets its own SQLite file under tmp_path.
A file (not :memory:) is used because the genre pages query from several
threads at once, and each thread needs its own connection to the same data.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting and caching, and keeps the module-level engine
# off PostgreSQL
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CACHE_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from catalog.database import Base, get_session_factory
from catalog.main import app
from catalog.models import Book, Genre
from catalog.services.genre_store import GenreStore


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture
def engine(tmp_path):
    """
    Create a SQLite engine on a fresh database file.

    check_same_thread=False lets the thread pool use the connections.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'catalog.db'}",
        connect_args={"check_same_thread": False},
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    """Session factory bound to the test engine, configured like the app's."""
    return sessionmaker(
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


@pytest.fixture
def store(session_factory) -> GenreStore:
    """A genre store over the test database."""
    return GenreStore(session_factory)


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_session_factory dependency so every store the
    handlers build talks to the test database.
    """
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# QUERY HELPERS
# =============================================================================
@pytest.fixture
def count_genres(session_factory):
    """Return a function counting the genre rows."""

    def _count() -> int:
        with session_factory() as session:
            return session.execute(select(func.count(Genre.id))).scalar_one()

    return _count


@pytest.fixture
def load_genre(session_factory):
    """Return a function loading a genre by id from a fresh session."""

    def _load(genre_id: int) -> Genre | None:
        with session_factory() as session:
            return session.get(Genre, genre_id)

    return _load


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_genre(session_factory) -> Genre:
    """Create a sample genre for testing."""
    with session_factory() as session:
        genre = Genre(name="Science Fiction")
        session.add(genre)
        session.commit()
        session.refresh(genre)
        return genre


@pytest.fixture
def empty_genre(session_factory) -> Genre:
    """A genre no book references."""
    with session_factory() as session:
        genre = Genre(name="Poetry")
        session.add(genre)
        session.commit()
        session.refresh(genre)
        return genre


@pytest.fixture
def sample_books(session_factory, sample_genre: Genre) -> list[Book]:
    """Two books in the sample genre, added out of title order."""
    with session_factory() as session:
        genre = session.get(Genre, sample_genre.id)
        books = [
            Book(
                title="The Left Hand of Darkness",
                summary="An envoy visits the planet Gethen.",
                isbn="9780441478125",
                genres=[genre],
            ),
            Book(
                title="Dune",
                summary="A desert planet and the spice melange.",
                isbn="9780441172719",
                genres=[genre],
            ),
        ]
        session.add_all(books)
        session.commit()
        for book in books:
            session.refresh(book)
        return books
