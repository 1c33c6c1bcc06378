"""Protocol definitions for the stores the services depend on."""

from collections.abc import Sequence
from typing import Literal, Protocol, runtime_checkable
from uuid import UUID

from blog_api.models import BlogDB, UserDB
from blog_api.schemas.blog import BlogCreate, BlogUpdate

type RefAction = Literal["add", "remove"]


@runtime_checkable
class UserDirectory(Protocol):
    """
    Protocol for identity storage.

    `UserRepository` conforms to this protocol; tests substitute in-memory
    implementations with failure injection.
    """

    async def create(self, name: str, email: str, password_hash: str) -> UserDB:
        """Persist a new identity."""
        ...

    async def get_by_id(self, user_id: UUID) -> UserDB | None:
        """Look up an identity by id."""
        ...

    async def get_by_email(self, email: str) -> UserDB | None:
        """Look up an identity by exact email."""
        ...

    async def get_many_by_ids(self, user_ids: Sequence[UUID]) -> list[UserDB]:
        """Look up several identities in one round trip."""
        ...

    async def update_blog_refs(
        self,
        user_id: UUID,
        blog_id: UUID,
        action: RefAction,
    ) -> UserDB | None:
        """Add or remove a blog id in the owner's `owned_blog_ids`."""
        ...


@runtime_checkable
class BlogStore(Protocol):
    """Protocol for blog storage."""

    async def create(self, blog: BlogCreate, owner_id: UUID) -> BlogDB:
        """Persist a new blog."""
        ...

    async def get_by_id(self, blog_id: UUID) -> BlogDB | None:
        """Look up a blog by id."""
        ...

    async def get_by_ids(self, blog_ids: Sequence[UUID]) -> list[BlogDB]:
        """Look up several blogs in one round trip."""
        ...

    async def get_all(self) -> list[BlogDB]:
        """Return every blog, newest first."""
        ...

    async def paginate(self, page: int, limit: int) -> tuple[list[BlogDB], int]:
        """Return one page of blogs and the total number of blogs."""
        ...

    async def search(self, keyword: str) -> list[BlogDB]:
        """Case-insensitive substring search over title and content."""
        ...

    async def filter_by(
        self,
        category: str | None = None,
        owner_id: UUID | None = None,
    ) -> list[BlogDB]:
        """Return blogs matching every given criterion."""
        ...

    async def update(self, blog_id: UUID, blog_update: BlogUpdate) -> BlogDB | None:
        """Apply a partial update."""
        ...

    async def delete(self, blog_id: UUID) -> bool:
        """Delete a blog; False when it does not exist."""
        ...
