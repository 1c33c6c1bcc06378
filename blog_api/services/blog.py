"""
Blog service.

Creates and removes blogs while keeping each owner's `owned_blog_ids` in
step with the `blogs` table, checks ownership, and serves the read-side
queries with owner summaries attached.

Create and remove are two-step sagas over independent writes. Create
persists the blog, then links it to the owner; a failed link is compensated
by deleting the blog. Remove deletes the blog, then unlinks it, so a failed
unlink leaves at worst a reference to a blog that no longer resolves.
Neither flow retries.
"""

from collections.abc import Sequence
from enum import StrEnum
from uuid import UUID

from structlog.stdlib import BoundLogger

from blog_api.errors import (
    BlogNotFoundError,
    BlogPersistenceFailedError,
    ClientInputError,
    InvalidIdentifierError,
    OwnershipSyncFailedError,
    RemovalFailedError,
    UnauthorizedError,
)
from blog_api.models import BlogDB, UserDB
from blog_api.monitoring import get_logger
from blog_api.repositories.protocols import BlogStore, UserDirectory
from blog_api.schemas.blog import BlogCreate, BlogResponse, BlogUpdate, PaginatedBlogs
from blog_api.utils.helpers import parse_uuid

logger = get_logger(__name__)

NOT_AUTHORIZED = "You are not authorized to perform this action"


class SagaState(StrEnum):
    STARTED = "started"
    PERSISTED = "persisted"
    LINKED = "linked"
    LINK_FAILED = "link_failed"
    COMPENSATED = "compensated"
    COMPENSATION_FAILED = "compensation_failed"


class BlogService:
    """Service coordinating blog rows and owner blog references."""

    def __init__(self, blog_repo: BlogStore, user_repo: UserDirectory) -> None:
        self.blog_repo = blog_repo
        self.user_repo = user_repo

    async def create(self, blog_in: BlogCreate, owner_id: UUID) -> BlogDB:
        """
        Persist a blog and link it to its owner.

        Args:
            blog_in: Validated blog data
            owner_id: Id of the authenticated owner

        Returns:
            BlogDB: The created blog

        Raises:
            BlogPersistenceFailedError: If the blog could not be written
            OwnershipSyncFailedError: If the owner could not be linked; the
                blog has been removed again unless compensation also failed
        """
        log = logger.bind(owner_id=str(owner_id))
        log.debug("blog_create", state=SagaState.STARTED)

        try:
            blog = await self.blog_repo.create(blog_in, owner_id)
        except Exception as e:
            log.exception("blog_create_persist_failed")
            raise BlogPersistenceFailedError from e

        log = log.bind(blog_id=str(blog.id))
        log.debug("blog_create", state=SagaState.PERSISTED)

        try:
            linked = await self.user_repo.update_blog_refs(owner_id, blog.id, "add")
            if linked is None:
                msg = f"Owner {owner_id} does not exist"
                raise LookupError(msg)
        except Exception as link_error:
            log.warning("blog_create", state=SagaState.LINK_FAILED, error=repr(link_error))
            await self._compensate_create(blog.id, log)
            raise OwnershipSyncFailedError from link_error

        log.info("blog_create", state=SagaState.LINKED)
        return blog

    async def _compensate_create(self, blog_id: UUID, log: BoundLogger) -> SagaState:
        try:
            # False means the row is already gone, which is the goal
            await self.blog_repo.delete(blog_id)
        except Exception as e:
            log.critical(
                "blog_create_compensation_failed",
                state=SagaState.COMPENSATION_FAILED,
                error=repr(e),
                action="orphaned blog without owner reference; reconcile manually",
            )
            return SagaState.COMPENSATION_FAILED

        log.info("blog_create", state=SagaState.COMPENSATED)
        return SagaState.COMPENSATED

    async def remove(self, blog_id: UUID, owner_id: UUID) -> None:
        """
        Delete a blog and unlink it from its owner.

        Raises:
            BlogNotFoundError: If the blog does not exist
            RemovalFailedError: If the delete or the unlink fails
        """
        log = logger.bind(blog_id=str(blog_id), owner_id=str(owner_id))

        try:
            deleted = await self.blog_repo.delete(blog_id)
        except Exception as e:
            log.exception("blog_remove_delete_failed")
            raise RemovalFailedError from e
        if not deleted:
            raise BlogNotFoundError

        try:
            await self.user_repo.update_blog_refs(owner_id, blog_id, "remove")
        except Exception as e:
            log.error(
                "blog_remove_unlink_failed",
                error=repr(e),
                action="owner keeps a reference to a deleted blog",
            )
            raise RemovalFailedError from e

        log.info("blog_removed")

    async def find_by_id(self, blog_id: str | UUID) -> BlogResponse:
        """
        Fetch one blog with its owner summary.

        Raises:
            InvalidIdentifierError: If `blog_id` is not a valid id
            BlogNotFoundError: If no blog has this id
        """
        parsed = parse_uuid(str(blog_id))
        if parsed is None:
            raise InvalidIdentifierError

        blog = await self.blog_repo.get_by_id(parsed)
        if blog is None:
            raise BlogNotFoundError

        owner = await self.user_repo.get_by_id(blog.owner_id)
        return BlogResponse.from_db(blog, owner)

    async def authorize_owner_action(
        self,
        blog_id: str | UUID,
        requester_id: UUID | None,
    ) -> bool:
        """
        Tell whether `requester_id` owns the blog.

        Any failure to resolve the blog raises the same `UnauthorizedError`,
        so the answer does not reveal whether the blog exists.
        """
        parsed = parse_uuid(str(blog_id))
        if parsed is None or requester_id is None:
            raise UnauthorizedError(NOT_AUTHORIZED)

        try:
            blog = await self.blog_repo.get_by_id(parsed)
        except Exception as e:
            logger.warning("blog_owner_lookup_failed", blog_id=str(parsed), error=repr(e))
            raise UnauthorizedError(NOT_AUTHORIZED) from e
        if blog is None:
            raise UnauthorizedError(NOT_AUTHORIZED)

        return blog.owner_id == requester_id

    async def update(self, blog_id: UUID, blog_update: BlogUpdate) -> BlogResponse:
        """Apply a partial update and return the refreshed blog."""
        blog = await self.blog_repo.update(blog_id, blog_update)
        if blog is None:
            raise BlogNotFoundError
        owner = await self.user_repo.get_by_id(blog.owner_id)
        return BlogResponse.from_db(blog, owner)

    async def list_all(self) -> list[BlogResponse]:
        return await self._with_owners(await self.blog_repo.get_all())

    async def paginate(self, page: int, limit: int) -> PaginatedBlogs:
        """
        Return page `page` of size `limit` and the total blog count.

        Raises:
            ClientInputError: If page or limit is not positive
        """
        if page < 1 or limit < 1:
            msg = "Page and limit must be positive integers"
            raise ClientInputError(msg)

        blogs, total = await self.blog_repo.paginate(page, limit)
        return PaginatedBlogs(data=await self._with_owners(blogs), total=total)

    async def search(self, keyword: str | None) -> list[BlogResponse]:
        """
        Case-insensitive substring search over title and content.

        Raises:
            ClientInputError: If the keyword is missing or blank
        """
        if not keyword or not keyword.strip():
            msg = "Keyword is required"
            raise ClientInputError(msg)
        return await self._with_owners(await self.blog_repo.search(keyword.strip()))

    async def filter_by(
        self,
        category: str | None = None,
        owner: str | UUID | None = None,
    ) -> list[BlogResponse]:
        """
        Filter by exact category and/or owner id.

        Raises:
            InvalidIdentifierError: If `owner` is given but is not a valid id
        """
        owner_id = None
        if owner:
            owner_id = parse_uuid(str(owner))
            if owner_id is None:
                msg = "Invalid owner ID"
                raise InvalidIdentifierError(msg)

        blogs = await self.blog_repo.filter_by(category=category or None, owner_id=owner_id)
        return await self._with_owners(blogs)

    async def owned_blogs(self, user: UserDB) -> list[BlogDB]:
        """Blogs referenced by `user.owned_blog_ids`, in that order; dangling ids are skipped."""
        ids = [uid for ref in user.owned_blog_ids if (uid := parse_uuid(ref))]
        by_id = {blog.id: blog for blog in await self.blog_repo.get_by_ids(ids)}
        return [by_id[uid] for uid in ids if uid in by_id]

    async def _with_owners(self, blogs: Sequence[BlogDB]) -> list[BlogResponse]:
        owner_ids = list({blog.owner_id for blog in blogs})
        owners = {user.id: user for user in await self.user_repo.get_many_by_ids(owner_ids)}
        return [BlogResponse.from_db(blog, owners.get(blog.owner_id)) for blog in blogs]
