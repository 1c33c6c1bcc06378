"""Fixtures for repository tests against an in-memory SQLite database."""

from collections.abc import AsyncGenerator

from pytest import fixture
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from blog_api.models import UserDB
from blog_api.repositories import BlogRepository, UserRepository


@fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """One shared in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    async with AsyncSession(engine, expire_on_commit=False, autoflush=False) as session:
        yield session


@fixture
def user_repo(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@fixture
def blog_repo(session: AsyncSession) -> BlogRepository:
    return BlogRepository(session)


@fixture
async def owner(user_repo: UserRepository) -> UserDB:
    return await user_repo.create("Ann", "ann@example.com", "salt.hash")


@fixture
async def other_owner(user_repo: UserRepository) -> UserDB:
    return await user_repo.create("Bob", "bob@example.com", "salt.hash")
