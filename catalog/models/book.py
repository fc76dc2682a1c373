"""
Book Model

Books are only read by the genre pages: a genre's detail and delete pages
list the books that reference it, and those references block deletion.

This file also contains the association table for the many-to-many
relationship between books and genres:
- book_genres: Links books to genres

WHY an Association Table?
=========================
In relational databases, many-to-many relationships require a "junction"
table holding a foreign key to each side. SQLAlchemy can create these as
Table objects (not full models) when no extra data is stored on the link.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.genre import Genre


# =============================================================================
# Association Tables
# =============================================================================
# genre_id is RESTRICT: the database refuses to delete a genre that still
# has books, even if two requests race past the handler's check.

book_genres = Table(
    "book_genres",
    Base.metadata,
    Column(
        "book_id",
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "genre_id",
        Integer,
        ForeignKey("genres.id", ondelete="RESTRICT"),
        primary_key=True,
    ),
    comment="Association table linking books to their genres",
)


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required)
    - summary: Short description of the book
    - isbn: International Standard Book Number (unique)

    Relationships:
    - genres: Many-to-Many (a book can belong to multiple genres)

    Example:
        book = Book(
            title="The Left Hand of Darkness",
            summary="An envoy visits a planet whose people have no fixed sex.",
            isbn="9780441478125",
            genres=[science_fiction],
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    summary: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Book summary"
    )

    # Optional because older books might not have one
    isbn: Mapped[str | None] = mapped_column(
        String(20),
        unique=True,
        index=True,
        nullable=True,
        comment="International Standard Book Number"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    genres: Mapped[list["Genre"]] = relationship(
        "Genre",
        secondary=book_genres,
        back_populates="books",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')"
