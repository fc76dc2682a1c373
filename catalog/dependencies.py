"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

The genre handlers get both of their collaborators from here:
- Store: the data-access collaborator, built on the session factory
- Templates: the template renderer

Tests replace either with app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import sessionmaker

from catalog.database import get_session_factory
from catalog.services.genre_store import GenreStore
from catalog.templating import get_templates


def get_genre_store(
    session_factory: Annotated[sessionmaker, Depends(get_session_factory)],
) -> GenreStore:
    """Build the genre store for this request."""
    return GenreStore(session_factory)


# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_genres(store: GenreStore = Depends(get_genre_store)):
#
# You can write:
#   def list_genres(store: Store):

Store = Annotated[GenreStore, Depends(get_genre_store)]
Templates = Annotated[Jinja2Templates, Depends(get_templates)]
