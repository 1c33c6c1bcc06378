"""Blog repository for database operations."""

from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import desc, func, or_, select
from sqlalchemy.sql import Select
from sqlmodel import col

from blog_api.models.blog import BlogDB
from blog_api.monitoring import get_logger
from blog_api.repositories.base import BaseRepository
from blog_api.schemas.blog import BlogCreate, BlogUpdate

logger = get_logger(__name__)


def _newest_first(query: Select) -> Select:
    # id breaks ties so pages never overlap
    return query.order_by(desc(col(BlogDB.created_at)), col(BlogDB.id))


class BlogRepository(BaseRepository):
    """
    Repository for Blog database operations.

    SQL implementation of the `BlogStore` protocol. Ownership bookkeeping
    lives in `BlogService`; this class only touches the `blogs` table.
    """

    async def create(self, blog: BlogCreate, owner_id: UUID) -> BlogDB:
        """
        Create a new blog post in the database.

        Args:
            blog: Blog schema with blog data
            owner_id: UUID of the blog owner

        Returns:
            BlogDB: Created blog database model

        Raises:
            DatabaseError: If the write fails
        """
        db_blog = BlogDB(
            owner_id=owner_id,
            title=blog.title,
            content=blog.content,
            category=blog.category,
            created_at=datetime.now(tz=UTC),
        )
        return await self._add_and_refresh(db_blog)

    async def get_by_id(self, blog_id: UUID) -> BlogDB | None:
        """
        Get blog by ID.

        Args:
            blog_id: Blog UUID

        Returns:
            BlogDB | None: Blog if found, None otherwise
        """
        result = await self.session.execute(
            select(BlogDB).where(col(BlogDB.id) == blog_id),
        )
        return result.scalar_one_or_none()

    async def get_by_ids(self, blog_ids: Sequence[UUID]) -> list[BlogDB]:
        if not blog_ids:
            return []
        result = await self.session.execute(
            _newest_first(select(BlogDB).where(col(BlogDB.id).in_(set(blog_ids)))),
        )
        return list(result.scalars().all())

    async def get_all(self) -> list[BlogDB]:
        """Get every blog, newest first."""
        result = await self.session.execute(_newest_first(select(BlogDB)))
        return list(result.scalars().all())

    async def paginate(self, page: int, limit: int) -> tuple[list[BlogDB], int]:
        """
        Get one page of blogs together with the total count.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            tuple[list[BlogDB], int]: The page and the number of stored blogs
        """
        skip = (page - 1) * limit
        result = await self.session.execute(
            _newest_first(select(BlogDB)).offset(skip).limit(limit),
        )
        total = await self.session.execute(select(func.count()).select_from(BlogDB))
        return list(result.scalars().all()), total.scalar() or 0

    async def search(self, keyword: str) -> list[BlogDB]:
        """
        Search blogs whose title or content contains `keyword`.

        Matching is case-insensitive; `%` and `_` in the keyword are literal.

        Args:
            keyword: Non-empty search term

        Returns:
            list[BlogDB]: Matching blogs, newest first
        """
        query = select(BlogDB).where(
            or_(
                col(BlogDB.title).icontains(keyword, autoescape=True),
                col(BlogDB.content).icontains(keyword, autoescape=True),
            ),
        )
        result = await self.session.execute(_newest_first(query))
        blogs = list(result.scalars().all())
        logger.debug("blog_search", matches=len(blogs))
        return blogs

    async def filter_by(
        self,
        category: str | None = None,
        owner_id: UUID | None = None,
    ) -> list[BlogDB]:
        """
        Get blogs matching the given criteria; no criteria returns everything.

        Args:
            category: Optional exact category
            owner_id: Optional owner UUID

        Returns:
            list[BlogDB]: Matching blogs, newest first
        """
        query = select(BlogDB)
        if category:
            query = query.where(col(BlogDB.category) == category)
        if owner_id:
            query = query.where(col(BlogDB.owner_id) == owner_id)

        result = await self.session.execute(_newest_first(query))
        return list(result.scalars().all())

    async def update(self, blog_id: UUID, blog_update: BlogUpdate) -> BlogDB | None:
        """
        Update blog information.

        Args:
            blog_id: Blog UUID
            blog_update: Blog update schema with fields to update

        Returns:
            BlogDB | None: Updated blog if found, None otherwise
        """
        db_blog = await self.get_by_id(blog_id)
        if not db_blog:
            return None

        update_data = blog_update.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            return db_blog

        for key, value in update_data.items():
            setattr(db_blog, key, value)
        db_blog.updated_at = datetime.now(tz=UTC)

        return await self._add_and_refresh(db_blog)

    async def delete(self, blog_id: UUID) -> bool:
        """
        Delete blog by ID.

        Args:
            blog_id: Blog UUID

        Returns:
            bool: True if blog was deleted, False if not found
        """
        db_blog = await self.get_by_id(blog_id)
        if not db_blog:
            return False

        await self._delete(db_blog)
        return True
