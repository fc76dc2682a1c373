"""
SQLAlchemy Models Package

This package contains all database models for the catalog.
Models are SQLAlchemy ORM classes that map to database tables.

Model Relationships:
- Genre <-> Book: Many-to-Many (a book can belong to multiple genres,
                  a genre contains many books)

Import all models here to:
1. Make them available as: from catalog.models import Book, Genre
2. Ensure Alembic discovers them for migrations
3. Provide a single import point for the application
"""

# The order matters for SQLAlchemy to resolve relationships
from catalog.models.genre import Genre
from catalog.models.book import Book, book_genres

__all__ = [
    "Genre",
    "Book",
    "book_genres",
]
