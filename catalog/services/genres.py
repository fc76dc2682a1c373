"""
Genre Page Services

Helpers shared by the genre handlers:

- parse_genre_id: turn a path or form value into a genre id
- fetch_genre_with_books: fetch a genre and its books concurrently

Fan-out / join
==============
The detail, delete-confirmation and delete handlers need both the genre and
the books that reference it. The two queries don't depend on each other, so
they run at the same time on the thread pool and the handler waits for both.
Either may finish first. If one fails, its error is raised and the request
is aborted; nothing is rendered from a half result.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from starlette.concurrency import run_in_threadpool

from catalog.exceptions import GenreNotFoundError
from catalog.models import Book, Genre
from catalog.schemas import sanitize
from catalog.services.genre_store import GenreStore

logger = logging.getLogger(__name__)


@dataclass
class GenreWithBooks:
    """A genre (None if it doesn't exist) and the books referencing it."""

    genre: Optional[Genre]
    books: List[Book] = field(default_factory=list)

    @property
    def has_books(self) -> bool:
        return len(self.books) > 0


def parse_genre_id(raw: str) -> int:
    """
    Convert a submitted id into a genre id.

    Examples:
        parse_genre_id(" 12 ") -> 12
        parse_genre_id("abc")  -> GenreNotFoundError

    Raises:
        GenreNotFoundError: If the value can't be a genre id
    """
    cleaned = sanitize(raw)
    try:
        genre_id = int(cleaned)
    except ValueError:
        raise GenreNotFoundError(cleaned) from None
    if genre_id < 1:
        raise GenreNotFoundError(cleaned)
    return genre_id


async def fetch_genre_with_books(store: GenreStore, genre_id: int) -> GenreWithBooks:
    """
    Fetch a genre and its dependent books concurrently.

    Args:
        store: Data-access collaborator
        genre_id: Parsed genre id

    Returns:
        GenreWithBooks once both queries have completed
    """
    genre, books = await asyncio.gather(
        run_in_threadpool(store.find_by_id, genre_id),
        run_in_threadpool(store.find_books_by_genre, genre_id),
    )
    logger.debug(f"Genre {genre_id}: found={genre is not None}, books={len(books)}")
    return GenreWithBooks(genre=genre, books=books)
