"""Tests for the /api/auth endpoints."""

from collections.abc import Callable

from httpx import AsyncClient
from pytest_mock.plugin import MockerFixture
from sqlalchemy.exc import OperationalError
from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from blog_api.models import UserDB
from blog_api.schemas.blog import BlogCreate
from blog_api.services import BlogService
from fakes import InMemoryUserDirectory

SIGNUP_URL = "/api/auth/signup"
SIGNIN_URL = "/api/auth/signin"
WHOAMI_URL = "/api/auth/whoami"


class TestSignup:
    """Tests for POST /api/auth/signup."""

    async def test_creates_identity(
        self,
        client: AsyncClient,
        user_store: InMemoryUserDirectory,
        password: str,
    ) -> None:
        """A valid signup returns a bearer token and stores the user."""
        payload = {"name": "Ann", "email": "ann@example.com", "password": password}

        response = await client.post(SIGNUP_URL, json=payload)

        assert response.status_code == HTTP_201_CREATED, response.text
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["access_token"]
        assert await user_store.get_by_email("ann@example.com") is not None

    async def test_duplicate_email(
        self,
        client: AsyncClient,
        ann: UserDB,
        password: str,
    ) -> None:
        """Signing up twice with one email is a conflict."""
        payload = {"name": "Other", "email": ann.email, "password": password}

        response = await client.post(SIGNUP_URL, json=payload)

        assert response.status_code == HTTP_409_CONFLICT
        assert response.json() == {"detail": "Email already in use"}

    async def test_weak_password(self, client: AsyncClient) -> None:
        """Weak passwords fail validation and name the broken rules."""
        payload = {"name": "Ann", "email": "ann@example.com", "password": "password"}

        response = await client.post(SIGNUP_URL, json=payload)

        assert response.status_code == HTTP_422_UNPROCESSABLE_CONTENT
        body = response.json()
        assert body["detail"] == "Validation failed"
        [error] = body["errors"]
        assert error["field"] == "password"
        assert "at least 2 digits" in error["message"]

    async def test_missing_fields(self, client: AsyncClient) -> None:
        response = await client.post(SIGNUP_URL, json={"email": "ann@example.com"})

        assert response.status_code == HTTP_422_UNPROCESSABLE_CONTENT
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"name", "password"}

    async def test_invalid_email(self, client: AsyncClient, password: str) -> None:
        payload = {"name": "Ann", "email": "not-an-email", "password": password}

        response = await client.post(SIGNUP_URL, json=payload)

        assert response.status_code == HTTP_422_UNPROCESSABLE_CONTENT

    async def test_domain_case_is_distinct(
        self,
        client: AsyncClient,
        user_store: InMemoryUserDirectory,
        password: str,
    ) -> None:
        """Addresses differing only in domain case are separate identities, stored as sent."""
        for email in ("ann@X.com", "ann@x.com"):
            payload = {"name": "Ann", "email": email, "password": password}

            response = await client.post(SIGNUP_URL, json=payload)

            assert response.status_code == HTTP_201_CREATED, response.text

        assert sorted(user.email for user in user_store.users.values()) == [
            "ann@X.com",
            "ann@x.com",
        ]


class TestSignin:
    """Tests for POST /api/auth/signin."""

    async def test_success(self, client: AsyncClient, ann: UserDB, password: str) -> None:
        response = await client.post(SIGNIN_URL, json={"email": ann.email, "password": password})

        assert response.status_code == HTTP_200_OK
        assert response.json()["access_token"]

    async def test_unknown_email(self, client: AsyncClient, password: str) -> None:
        """An unknown email is a client error, not an auth failure."""
        response = await client.post(
            SIGNIN_URL,
            json={"email": "nobody@example.com", "password": password},
        )

        assert response.status_code == HTTP_400_BAD_REQUEST
        assert response.json() == {"detail": "Invalid credentials"}

    async def test_wrong_password(self, client: AsyncClient, ann: UserDB) -> None:
        response = await client.post(
            SIGNIN_URL,
            json={"email": ann.email, "password": "Wr0ng!!Pw99"},
        )

        assert response.status_code == HTTP_401_UNAUTHORIZED

    async def test_token_from_signin_is_accepted(
        self,
        client: AsyncClient,
        ann: UserDB,
        password: str,
    ) -> None:
        """The issued token authenticates follow-up requests."""
        signin = await client.post(SIGNIN_URL, json={"email": ann.email, "password": password})
        token = signin.json()["access_token"]

        response = await client.get(WHOAMI_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == HTTP_200_OK
        assert response.json()["email"] == ann.email

    async def test_lookup_failure_is_opaque(
        self,
        client: AsyncClient,
        user_store: InMemoryUserDirectory,
        mocker: MockerFixture,
        password: str,
    ) -> None:
        """A database error while looking up the user is a JSON 500 without driver text."""
        mocker.patch.object(
            user_store,
            "get_by_email",
            side_effect=OperationalError("SELECT", {}, ConnectionError("db host unreachable")),
        )

        response = await client.post(
            SIGNIN_URL,
            json={"email": "ann@example.com", "password": password},
        )

        assert response.status_code == HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "Database Error"}


class TestWhoami:
    """Tests for GET /api/auth/whoami."""

    async def test_anonymous(self, client: AsyncClient) -> None:
        response = await client.get(WHOAMI_URL)

        assert response.status_code == HTTP_401_UNAUTHORIZED

    async def test_invalid_token_is_anonymous(self, client: AsyncClient) -> None:
        response = await client.get(WHOAMI_URL, headers={"Authorization": "Bearer garbage"})

        assert response.status_code == HTTP_401_UNAUTHORIZED

    async def test_lists_owned_blogs(
        self,
        client: AsyncClient,
        blog_service: BlogService,
        ann: UserDB,
        bearer: Callable[[UserDB], dict[str, str]],
        blog_in: BlogCreate,
    ) -> None:
        """The identity view resolves owned blog ids to summaries."""
        blog = await blog_service.create(blog_in, ann.id)

        response = await client.get(WHOAMI_URL, headers=bearer(ann))

        assert response.status_code == HTTP_200_OK
        body = response.json()
        assert body["id"] == str(ann.id)
        assert "password_hash" not in body
        assert [entry["id"] for entry in body["blogs"]] == [str(blog.id)]
