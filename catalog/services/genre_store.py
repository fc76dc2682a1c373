"""
Genre Store

Data-access collaborator for the genre pages.

The store is built from a session factory rather than a session: every
method opens its own short-lived session. Two methods can therefore run on
different threads at the same time, which the genre detail and delete pages
rely on to fetch a genre and its books concurrently.

Method names follow the lookups the handlers perform:
- find_all / find_by_id / find_one_by_name: reads
- save / find_by_id_and_update / find_by_id_and_remove: writes
- find_books_by_genre: the dependents of a genre

Errors:
- IntegrityError from a write is rolled back and re-raised; the caller
  decides what a duplicate name means
- Any other SQLAlchemyError propagates unchanged
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from catalog.models import Book, Genre

logger = logging.getLogger(__name__)


class GenreStore:
    """Genre and dependent-book queries over a session factory."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def find_all(self) -> List[Genre]:
        """All genres, ordered by name ascending."""
        with self._session_factory() as session:
            stmt = select(Genre).order_by(Genre.name)
            return list(session.execute(stmt).scalars().all())

    def find_by_id(self, genre_id: int) -> Optional[Genre]:
        with self._session_factory() as session:
            return session.get(Genre, genre_id)

    def find_one_by_name(self, name: str) -> Optional[Genre]:
        """The genre whose name matches exactly, if any."""
        with self._session_factory() as session:
            stmt = select(Genre).where(Genre.name == name).limit(1)
            return session.execute(stmt).scalar_one_or_none()

    def find_books_by_genre(self, genre_id: int) -> List[Book]:
        """Books that reference the genre, ordered by title."""
        with self._session_factory() as session:
            stmt = (
                select(Book)
                .join(Book.genres)
                .where(Genre.id == genre_id)
                .order_by(Book.title)
            )
            return list(session.execute(stmt).scalars().all())

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    def save(self, genre: Genre) -> Genre:
        """
        Insert a new genre.

        Returns:
            The saved genre with its id assigned

        Raises:
            IntegrityError: If the name is already taken
        """
        with self._session_factory() as session:
            session.add(genre)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                logger.info(f"Genre name '{genre.name}' already taken")
                raise
            session.refresh(genre)
            logger.info(f"Created genre {genre.id} ('{genre.name}')")
            return genre

    def find_by_id_and_update(self, genre_id: int, name: str) -> Optional[Genre]:
        """
        Rename a genre in place. The id never changes.

        Returns:
            The updated genre, or None if no genre has this id

        Raises:
            IntegrityError: If another genre already has the name
        """
        with self._session_factory() as session:
            genre = session.get(Genre, genre_id)
            if genre is None:
                return None
            genre.name = name
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                logger.info(f"Genre name '{name}' already taken")
                raise
            session.refresh(genre)
            logger.info(f"Updated genre {genre.id} to '{genre.name}'")
            return genre

    def find_by_id_and_remove(self, genre_id: int) -> Optional[Genre]:
        """
        Delete a genre.

        Returns:
            The removed genre, or None if there was nothing to remove
        """
        with self._session_factory() as session:
            genre = session.get(Genre, genre_id)
            if genre is None:
                return None
            # Core DELETE: the ORM would otherwise clear the book_genres rows itself
            session.execute(delete(Genre).where(Genre.id == genre_id))
            session.commit()
            logger.info(f"Deleted genre {genre_id}")
            return genre
