"""Application dependencies: sessions, services and the per-request identity."""

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.configs import AuthConfig, settings
from blog_api.db import get_session
from blog_api.errors import UnauthorizedError
from blog_api.managers import PasswordHasher, TokenManager
from blog_api.models import UserDB
from blog_api.repositories import BlogRepository, UserRepository
from blog_api.services import AuthService, BlogService

bearer_scheme = HTTPBearer(auto_error=False, description="Access token from signin")


@lru_cache
def get_auth_config() -> AuthConfig:
    """Build the authentication configuration once per process."""
    return AuthConfig.from_settings(settings)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(get_auth_config())


@lru_cache
def get_token_manager() -> TokenManager:
    return TokenManager(get_auth_config())


def get_user_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_blog_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BlogRepository:
    """
    Resolve the `BlogRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogRepository
        Repository instance bound to the session.
    """
    return BlogRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]


def get_auth_service(
    user_repo: UserRepoDep,
    config: Annotated[AuthConfig, Depends(get_auth_config)],
) -> AuthService:
    return AuthService(
        user_repo,
        config,
        hasher=get_password_hasher(),
        token_manager=get_token_manager(),
    )


def get_blog_service(blog_repo: BlogRepoDep, user_repo: UserRepoDep) -> BlogService:
    return BlogService(blog_repo, user_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]


@dataclass(frozen=True)
class RequestContext:
    """Identity resolved from the bearer token; None means anonymous."""

    identity: UserDB | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


async def get_request_context(
    auth_service: AuthServiceDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> RequestContext:
    """
    Resolve the caller once per request.

    Missing, malformed or expired tokens and tokens naming an unknown user
    all give an anonymous context rather than an error.
    """
    token = credentials.credentials if credentials else None
    return RequestContext(identity=await auth_service.resolve_identity(token))


RequestContextDep = Annotated[RequestContext, Depends(get_request_context)]


async def require_identity(context: RequestContextDep) -> UserDB:
    """
    Get the authenticated user or fail.

    Raises
    ------
    UnauthorizedError
        If the request is anonymous.
    """
    if context.identity is None:
        raise UnauthorizedError
    return context.identity


CurrentUserDep = Annotated[UserDB, Depends(require_identity)]


async def require_blog_owner(
    blog_id: Annotated[str, Path(description="Blog ID")],
    user: CurrentUserDep,
    blog_service: BlogServiceDep,
) -> UUID:
    """
    Guard for owner-only blog routes.

    Returns
    -------
    UUID
        The parsed blog id, once ownership is established.

    Raises
    ------
    UnauthorizedError
        If the blog cannot be resolved or belongs to someone else.
    """
    if not await blog_service.authorize_owner_action(blog_id, user.id):
        raise UnauthorizedError("You are not authorized to perform this action")
    return UUID(blog_id)


OwnedBlogIdDep = Annotated[UUID, Depends(require_blog_owner)]


@dataclass(frozen=True)
class PageQuery:
    page: int = 1
    limit: int = 10


def get_page_query(
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[int, Query(ge=1, description="Page size")] = 10,
) -> PageQuery:
    return PageQuery(page=page, limit=limit)


PageQueryDep = Annotated[PageQuery, Depends(get_page_query)]
