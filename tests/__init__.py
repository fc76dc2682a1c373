"""
Test Suite for the Library Catalog

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_genres.py: Tests for the /catalog/genre* pages
- test_genre_store.py: Tests for the data-access layer
- test_genre_services.py: Tests for id parsing, the concurrent fetch and form schemas
- test_app.py: Tests for error pages, caching hooks and the health check

Running Tests:
    pytest
    pytest tests/test_genres.py -v
"""
