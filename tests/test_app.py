"""
Tests for Application-Level Behavior

Error pages, cache hooks, rate limiter helpers and the health check.
"""

from fastapi import status
from sqlalchemy.exc import OperationalError
from starlette.requests import Request

from catalog.dependencies import get_genre_store
from catalog.main import app
from catalog.services.cache import GENRE_LIST_KEY, invalidate_genre_cache
from catalog.services.rate_limiter import get_client_ip

PREFIX = "/catalog"


class BrokenStore:
    """Store whose every query fails like a lost database connection."""

    def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    find_all = _fail
    find_by_id = _fail
    find_books_by_genre = _fail


class TestErrorPages:
    """Tests for the exception handlers."""

    def test_database_error_renders_500(self, client):
        """Test a failing query surfaces as the generic error page."""
        app.dependency_overrides[get_genre_store] = lambda: BrokenStore()

        response = client.get(f"{PREFIX}/genres")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "A database error occurred" in response.text
        assert "database is down" not in response.text

    def test_database_error_in_fan_out(self, client):
        """Test a failing sub-query aborts the detail page."""
        app.dependency_overrides[get_genre_store] = lambda: BrokenStore()

        response = client.get(f"{PREFIX}/genre/1")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR

    def test_unknown_page(self, client):
        response = client.get(f"{PREFIX}/authors")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "<h1>404</h1>" in response.text


class TestCacheHooks:
    """Tests for the genre list cache and its invalidation."""

    def test_list_served_from_cache(self, client, monkeypatch):
        cached = [{"id": 5, "name": "Cached Genre", "url": f"{PREFIX}/genre/5"}]
        monkeypatch.setattr("catalog.routers.genres.cache_get", lambda key: cached)

        response = client.get(f"{PREFIX}/genres")

        assert response.status_code == status.HTTP_200_OK
        assert "Cached Genre" in response.text

    def test_list_miss_fills_cache(self, client, sample_genre, monkeypatch):
        stored = {}
        monkeypatch.setattr(
            "catalog.routers.genres.cache_set",
            lambda key, value: stored.update({key: value}),
        )

        client.get(f"{PREFIX}/genres")

        assert stored["genres:all"] == [
            {
                "id": sample_genre.id,
                "name": "Science Fiction",
                "url": f"{PREFIX}/genre/{sample_genre.id}",
            }
        ]

    def test_writes_invalidate_cache(self, client, empty_genre, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "catalog.routers.genres.invalidate_genre_cache",
            lambda: calls.append("invalidated"),
        )

        client.post(f"{PREFIX}/genre/create", data={"name": "Western"})
        client.post(f"{PREFIX}/genre/{empty_genre.id}/update", data={"name": "Verse"})
        client.post(
            f"{PREFIX}/genre/{empty_genre.id}/delete",
            data={"genreid": str(empty_genre.id)},
        )

        assert len(calls) == 3

    def test_invalidate_drops_genre_list_key(self, monkeypatch):
        deleted = []
        monkeypatch.setattr(
            "catalog.services.cache.cache_delete",
            lambda key: deleted.append(key),
        )

        invalidate_genre_cache()

        assert deleted == [GENRE_LIST_KEY]


class TestClientIp:
    """Tests for the rate limiter's client key."""

    @staticmethod
    def _request(headers):
        return Request({
            "type": "http",
            "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
            "client": ("10.0.0.9", 50000),
        })

    def test_forwarded_for_first_address(self):
        request = self._request({"X-Forwarded-For": "1.2.3.4, 5.6.7.8"})

        assert get_client_ip(request) == "1.2.3.4"

    def test_real_ip(self):
        assert get_client_ip(self._request({"X-Real-IP": " 4.3.2.1 "})) == "4.3.2.1"

    def test_direct_connection(self):
        assert get_client_ip(self._request({})) == "10.0.0.9"


class TestHealth:
    """Tests for the health check and root redirect."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["cache"] == {"status": "disconnected"}
        assert data["rate_limiting"]["enabled"] is False

    def test_root_redirects_to_genre_list(self, client):
        response = client.get("/", follow_redirects=False)

        assert response.headers["location"] == f"{PREFIX}/genres"
