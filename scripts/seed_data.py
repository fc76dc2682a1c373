#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample genres and books for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py
    python scripts/seed_data.py --keep   # don't clear existing data

This script:
1. Connects to the database using app settings
2. Clears existing data (optional)
3. Creates sample genres and books
4. Links each book to its genres
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from catalog.database import SessionLocal, create_tables
from catalog.models import Book, Genre, book_genres
from catalog.services.cache import invalidate_genre_cache

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger("seed_data")


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    logger.info("Clearing existing data...")
    db.execute(delete(book_genres))
    db.execute(delete(Book))
    db.execute(delete(Genre))
    db.commit()
    logger.info("Data cleared.")


def create_genres(db: Session) -> dict[str, Genre]:
    """Create sample genres."""
    logger.info("Creating genres...")
    names = [
        "Fantasy",
        "Science Fiction",
        "French Poetry",
        "Mystery",
        "Dystopian",
    ]

    genres = {}
    for name in names:
        genre = Genre(name=name)
        db.add(genre)
        genres[name] = genre

    db.commit()
    for genre in genres.values():
        db.refresh(genre)

    logger.info(f"Created {len(genres)} genres.")
    return genres


def create_books(db: Session, genres: dict[str, Genre]) -> list[Book]:
    """Create sample books, each linked to one or more genres."""
    logger.info("Creating books...")
    books_data = [
        {
            "title": "The Name of the Wind",
            "summary": "The tale of Kvothe, from his childhood in a troupe of "
                       "travelling players to his years at the University.",
            "isbn": "9780756404079",
            "genres": ["Fantasy"],
        },
        {
            "title": "The Wise Man's Fear",
            "summary": "Kvothe searches for answers, a journey that takes him "
                       "from Vintas to the Adem.",
            "isbn": "9780756407919",
            "genres": ["Fantasy"],
        },
        {
            "title": "The Slow Regard of Silent Things",
            "summary": "Auri explores the Underthing beneath the University.",
            "isbn": "9780756411329",
            "genres": ["Fantasy"],
        },
        {
            "title": "Apes and Angels",
            "summary": "Humankind's fledgling expansion into the stars meets "
                       "a wave of destruction.",
            "isbn": "9780765379528",
            "genres": ["Science Fiction"],
        },
        {
            "title": "Death Wave",
            "summary": "Ben Bova's epic saga continues with a wave of deadly "
                       "radiation heading for Earth.",
            "isbn": "9780765379504",
            "genres": ["Science Fiction"],
        },
        {
            "title": "Nineteen Eighty-Four",
            "summary": "A dystopian novel set in a totalitarian society.",
            "isbn": "9780451524935",
            "genres": ["Science Fiction", "Dystopian"],
        },
    ]

    books = []
    for data in books_data:
        book = Book(
            title=data["title"],
            summary=data["summary"],
            isbn=data["isbn"],
            genres=[genres[name] for name in data["genres"]],
        )
        db.add(book)
        books.append(book)

    db.commit()
    logger.info(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    logger.info("=" * 60)
    logger.info("Starting database seed...")
    logger.info("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        genres = create_genres(db)
        books = create_books(db, genres)
        invalidate_genre_cache()

        logger.info("=" * 60)
        logger.info("Database seeding completed successfully!")
        logger.info(f"  - Genres: {len(genres)}")
        logger.info(f"  - Books: {len(books)}")

    except Exception as e:
        logger.error(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the catalog database")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing rows instead of clearing them first",
    )
    args = parser.parse_args()
    seed_database(clear_existing=not args.keep)
