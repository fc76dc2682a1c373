"""
Tests for the Genre Store

The store is exercised directly against the test database, without HTTP.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from catalog.models import Genre


class TestGenreStoreReads:
    """Tests for find_all, find_by_id, find_one_by_name and find_books_by_genre."""

    def test_find_all_ordered_by_name(self, store):
        for name in ["Romance", "Adventure", "Mystery"]:
            store.save(Genre(name=name))

        names = [genre.name for genre in store.find_all()]

        assert names == ["Adventure", "Mystery", "Romance"]

    def test_find_all_empty(self, store):
        assert store.find_all() == []

    def test_find_by_id(self, store, sample_genre):
        genre = store.find_by_id(sample_genre.id)

        assert genre is not None
        assert genre.name == "Science Fiction"

    def test_find_by_id_missing(self, store):
        assert store.find_by_id(99999) is None

    def test_find_one_by_name_exact_match(self, store, sample_genre):
        assert store.find_one_by_name("Science Fiction").id == sample_genre.id
        assert store.find_one_by_name("Science") is None

    def test_find_books_by_genre_ordered_by_title(self, store, sample_genre, sample_books):
        titles = [book.title for book in store.find_books_by_genre(sample_genre.id)]

        assert titles == ["Dune", "The Left Hand of Darkness"]

    def test_find_books_by_genre_none(self, store, empty_genre, sample_books):
        assert store.find_books_by_genre(empty_genre.id) == []


class TestGenreStoreWrites:
    """Tests for save, find_by_id_and_update and find_by_id_and_remove."""

    def test_save_assigns_id(self, store):
        genre = store.save(Genre(name="Horror"))

        assert genre.id is not None
        assert genre.url == f"/catalog/genre/{genre.id}"

    def test_save_duplicate_name_raises(self, store, sample_genre):
        """Test the unique constraint rejects a second genre with the name."""
        with pytest.raises(IntegrityError):
            store.save(Genre(name="Science Fiction"))

        assert len(store.find_all()) == 1

    def test_update_keeps_id(self, store, sample_genre):
        genre = store.find_by_id_and_update(sample_genre.id, "SF")

        assert genre.id == sample_genre.id
        assert store.find_by_id(sample_genre.id).name == "SF"

    def test_update_missing(self, store):
        assert store.find_by_id_and_update(99999, "Anything") is None

    def test_update_duplicate_name_raises(self, store, sample_genre, empty_genre):
        with pytest.raises(IntegrityError):
            store.find_by_id_and_update(empty_genre.id, "Science Fiction")

        assert store.find_by_id(empty_genre.id).name == "Poetry"

    def test_remove(self, store, empty_genre):
        removed = store.find_by_id_and_remove(empty_genre.id)

        assert removed.id == empty_genre.id
        assert store.find_by_id(empty_genre.id) is None

    def test_remove_missing(self, store):
        assert store.find_by_id_and_remove(99999) is None
