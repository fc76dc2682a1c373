"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the catalog.

We use SYNCHRONOUS SQLAlchemy. Handlers that need several independent
queries run them on the thread pool, and every query gets its own session
from the session factory (see catalog.services.genre_store).

Session Management Pattern
==========================
We use the "session per operation" pattern:
1. The store asks the factory for a new session
2. It runs one query or one write with it
3. Commit on success, rollback on failure
4. The session is closed when the `with` block ends

The factory itself is provided through FastAPI's dependency injection so
tests can swap in their own engine.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from catalog.config import get_settings

# Get settings instance
settings = get_settings()


def _engine_options(database_url: str) -> dict:
    """Pool options for the configured backend."""
    if make_url(database_url).get_backend_name() == "sqlite":
        # SQLite connections may be used from the handler thread pool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
    }


# =============================================================================
# Database Engine
# =============================================================================
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements (useful for debugging, disable in production)

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    echo=settings.debug,
    **_engine_options(settings.database_url),
)


# =============================================================================
# Session Factory
# =============================================================================
# - autoflush=False: Don't auto-flush before queries (more predictable behavior)
# - expire_on_commit=False: Rows stay readable after the session closes,
#   templates render them after the store has returned

SessionLocal = sessionmaker(
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    The Base class:
    1. Provides the SQLAlchemy mapper registry
    2. Enables table/model relationship tracking
    3. Is used by Alembic to discover models for migrations
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_session_factory() -> sessionmaker:
    """
    Session factory dependency for FastAPI.

    Tests override this with a factory bound to their own engine:

        app.dependency_overrides[get_session_factory] = lambda: TestSession

    Returns:
        The application's sessionmaker
    """
    return SessionLocal


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)
