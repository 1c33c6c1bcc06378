"""User response schema."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from blog_api.models import BlogDB, UserDB
from blog_api.schemas.blog import BlogSummary


class UserResponse(BaseModel):
    """Public view of an identity with the blogs it owns."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    blogs: list[BlogSummary] = []

    @classmethod
    def from_db(cls, user: UserDB, blogs: list[BlogDB]) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            blogs=[BlogSummary.model_validate(blog) for blog in blogs],
        )
