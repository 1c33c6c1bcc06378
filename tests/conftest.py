# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before blog_api is imported anywhere
os.environ["SECRET_KEY"] = "test-secret-key-for-pytest-only"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["LOG_TO_FILE"] = "false"
os.environ["ENVIRONMENT"] = "testing"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from collections.abc import AsyncGenerator, Callable

from httpx import ASGITransport, AsyncClient
from pytest import fixture

from blog_api.configs import AuthConfig, settings
from blog_api.dependencies.dependencies import get_blog_repository, get_user_repository
from blog_api.main import app
from blog_api.managers import PasswordHasher, TokenManager, limiter
from blog_api.models import UserDB
from blog_api.schemas.blog import BlogCreate
from blog_api.services import AuthService, BlogService
from fakes import InMemoryBlogStore, InMemoryUserDirectory

STRONG_PASSWORD = "Str0ng!!Pw9"


@fixture
def password() -> str:
    """A password that passes the signup strength rules."""
    return STRONG_PASSWORD


@fixture
def auth_config() -> AuthConfig:
    return AuthConfig.from_settings(settings)


@fixture
def calls() -> list[str]:
    """Shared, ordered log of store writes."""
    return []


@fixture
def user_store(calls: list[str]) -> InMemoryUserDirectory:
    return InMemoryUserDirectory(calls)


@fixture
def blog_store(calls: list[str]) -> InMemoryBlogStore:
    return InMemoryBlogStore(calls)


@fixture
def hasher(auth_config: AuthConfig) -> PasswordHasher:
    return PasswordHasher(auth_config)


@fixture
def token_manager(auth_config: AuthConfig) -> TokenManager:
    return TokenManager(auth_config)


@fixture
def auth_service(
    user_store: InMemoryUserDirectory,
    auth_config: AuthConfig,
    hasher: PasswordHasher,
    token_manager: TokenManager,
) -> AuthService:
    return AuthService(user_store, auth_config, hasher=hasher, token_manager=token_manager)


@fixture
def blog_service(blog_store: InMemoryBlogStore, user_store: InMemoryUserDirectory) -> BlogService:
    return BlogService(blog_store, user_store)


@fixture
async def ann(user_store: InMemoryUserDirectory, hasher: PasswordHasher) -> UserDB:
    """A stored user with a known password."""
    return await user_store.create("Ann", "ann@example.com", hasher.hash(STRONG_PASSWORD))


@fixture
async def bob(user_store: InMemoryUserDirectory, hasher: PasswordHasher) -> UserDB:
    return await user_store.create("Bob", "bob@example.com", hasher.hash(STRONG_PASSWORD))


@fixture
def blog_in() -> BlogCreate:
    return BlogCreate(title="Intro to asyncio", content="Event loops explained.", category="python")


@fixture
async def client(
    user_store: InMemoryUserDirectory,
    blog_store: InMemoryBlogStore,
) -> AsyncGenerator[AsyncClient]:
    """HTTP client whose repositories are the in-memory fakes."""
    limiter.enabled = False
    app.dependency_overrides[get_user_repository] = lambda: user_store
    app.dependency_overrides[get_blog_repository] = lambda: blog_store
    try:
        async with AsyncClient(
            base_url="http://test",
            transport=ASGITransport(app=app),
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@fixture
def bearer(token_manager: TokenManager) -> Callable[[UserDB], dict[str, str]]:
    """Build an Authorization header for a user."""

    def _bearer(user: UserDB) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_manager.issue(user.email, user.id)}"}

    return _bearer
