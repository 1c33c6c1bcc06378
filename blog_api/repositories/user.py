"""User repository for database operations."""

from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlmodel import col

from blog_api.models.user import UserDB
from blog_api.monitoring import get_logger
from blog_api.repositories.base import BaseRepository
from blog_api.repositories.protocols import RefAction

logger = get_logger(__name__)


class UserRepository(BaseRepository):
    """
    Repository for User database operations.

    SQL implementation of the `UserDirectory` protocol.
    """

    async def create(self, name: str, email: str, password_hash: str) -> UserDB:
        """
        Create a new user in the database.

        Args:
            name: Display name
            email: Email address
            password_hash: Password record produced by the password hasher

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If the email already exists
            DatabaseError: For other database errors
        """
        db_user = UserDB(name=name, email=email, password_hash=password_hash)
        return await self._add_and_refresh(db_user)

    async def get_by_id(self, user_id: UUID) -> UserDB | None:
        """
        Get user by ID.

        Args:
            user_id: User UUID

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(col(UserDB.id) == user_id),
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email.

        Args:
            email: Email to search for (exact, case-sensitive)

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(col(UserDB.email) == email),
        )
        return result.scalar_one_or_none()

    async def get_many_by_ids(self, user_ids: Sequence[UUID]) -> list[UserDB]:
        """Fetch every user whose id is in `user_ids`; unknown ids are skipped."""
        if not user_ids:
            return []
        result = await self.session.execute(
            select(UserDB).where(col(UserDB.id).in_(set(user_ids))),
        )
        return list(result.scalars().all())

    async def update_blog_refs(
        self,
        user_id: UUID,
        blog_id: UUID,
        action: RefAction,
    ) -> UserDB | None:
        """
        Add or remove a blog reference on the owner.

        Adding is idempotent (set-insert); removing an absent id is a no-op.

        Args:
            user_id: Owner UUID
            blog_id: Blog UUID
            action: "add" or "remove"

        Returns:
            UserDB | None: Updated user, None when the user does not exist

        Raises:
            DatabaseError: If the write fails
        """
        db_user = await self.get_by_id(user_id)
        if not db_user:
            return None

        ref = str(blog_id)
        if action == "add":
            refs = [*db_user.owned_blog_ids]
            if ref not in refs:
                refs.append(ref)
        else:
            refs = [r for r in db_user.owned_blog_ids if r != ref]

        # JSON columns only track reassignment
        db_user.owned_blog_ids = refs
        db_user.updated_at = datetime.now(tz=UTC)
        updated = await self._add_and_refresh(db_user)
        logger.debug("blog_refs_updated", user_id=str(user_id), action=action, count=len(refs))
        return updated
