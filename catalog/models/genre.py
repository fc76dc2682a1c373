"""
Genre Model

Represents a book genre/category in the database.

Genres allow books to be categorized for browsing.
A book can belong to multiple genres (e.g., "Science Fiction" and "Dystopian").
"""

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.config import get_settings
from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.book import Book


class Genre(Base):
    """
    Genre model representing book categories.

    Table: genres

    Relationships:
    - books: Many-to-Many relationship through book_genres table

    Indexes:
    - Primary key on id (automatic)
    - name: Unique index for preventing duplicate genres

    Example:
        genre = Genre(name="Science Fiction")
    """

    __tablename__ = "genres"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    # Stored trimmed and HTML-escaped, as the genre forms produce it
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Genre name (e.g., 'Science Fiction', 'Mystery')"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    books: Mapped[List["Book"]] = relationship(
        "Book",
        secondary="book_genres",
        back_populates="genres",
    )

    @property
    def url(self) -> str:
        """Path of this genre's detail page."""
        return f"{get_settings().catalog_prefix}/genre/{self.id}"

    def __repr__(self) -> str:
        return f"Genre(id={self.id}, name='{self.name}')"
