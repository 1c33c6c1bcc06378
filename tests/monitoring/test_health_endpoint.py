"""Tests for the health endpoint, the lifespan hooks and the request middleware."""

from asgi_lifespan import LifespanManager
from httpx import AsyncClient
from pytest_mock.plugin import MockerFixture
from starlette.status import HTTP_200_OK

from blog_api.main import app


class TestHealth:
    """Tests for GET /health."""

    async def test_ok(self, client: AsyncClient, mocker: MockerFixture) -> None:
        mocker.patch("blog_api.main.check_database", return_value=True)

        response = await client.get("/health")

        assert response.status_code == HTTP_200_OK
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "connected"
        assert body["version"] == "1.0.0"

    async def test_degraded(self, client: AsyncClient, mocker: MockerFixture) -> None:
        """An unreachable database degrades the status but still answers 200."""
        mocker.patch("blog_api.main.check_database", return_value=False)

        response = await client.get("/health")

        assert response.status_code == HTTP_200_OK
        assert response.json()["status"] == "degraded"
        assert response.json()["database"] == "unavailable"


async def test_lifespan_prepares_and_releases_database(mocker: MockerFixture) -> None:
    """Startup creates the tables and shutdown disposes the engine."""
    mocker.patch("blog_api.middleware.middleware.configure_logging")
    init_db = mocker.patch("blog_api.middleware.middleware.init_db")
    close_db = mocker.patch("blog_api.middleware.middleware.close_db")

    async with LifespanManager(app):
        init_db.assert_awaited_once()
        close_db.assert_not_awaited()

    close_db.assert_awaited_once()


class TestMiddleware:
    """Tests for request id and security headers."""

    async def test_request_id_is_generated(self, client: AsyncClient) -> None:
        response = await client.get("/api/blogs")

        assert len(response.headers["X-Request-ID"]) == 32

    async def test_request_id_is_echoed(self, client: AsyncClient) -> None:
        response = await client.get("/api/blogs", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    async def test_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/api/blogs")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
