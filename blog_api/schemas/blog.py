"""
Blog schemas.

Request bodies for creating and updating blogs and the response models that
carry the owner summary.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_api.configs.settings import (
    MAX_CONTENT_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_CONTENT_LENGTH,
    MIN_TITLE_LENGTH,
)
from blog_api.models import BlogDB, UserDB


class BlogCreate(BaseModel):
    """Blog creation model (request body)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(
        ...,
        min_length=MIN_TITLE_LENGTH,
        max_length=MAX_TITLE_LENGTH,
        description="A valid title for the blog",
        examples=["javascript"],
    )
    content: str = Field(
        ...,
        min_length=MIN_CONTENT_LENGTH,
        max_length=MAX_CONTENT_LENGTH,
        description="A valid content for the blog",
        examples=["A blog about javascript"],
    )
    category: str = Field(
        ...,
        min_length=1,
        description="A valid category for the blog",
        examples=["programming"],
    )


class BlogUpdate(BaseModel):
    """Partial blog update; omitted fields are left untouched."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(
        default=None,
        min_length=MIN_TITLE_LENGTH,
        max_length=MAX_TITLE_LENGTH,
    )
    content: str | None = Field(
        default=None,
        min_length=MIN_CONTENT_LENGTH,
        max_length=MAX_CONTENT_LENGTH,
    )
    category: str | None = Field(default=None, min_length=1)

    @field_validator("title", "content", "category", mode="before")
    @classmethod
    def reject_null(cls, value: object) -> object:
        if value is None:
            mssg = "Field may be omitted but not null"
            raise ValueError(mssg)
        return value


class OwnerSummary(BaseModel):
    """Owner information for blog responses (without sensitive data)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str


class BlogSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: str
    category: str


class BlogResponse(BlogSummary):
    """Blog with its owner reference resolved."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    owner: OwnerSummary | None = None
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(default="No updates", alias="updatedAt")

    @classmethod
    def from_db(cls, blog: BlogDB, owner: UserDB | None) -> "BlogResponse":
        """Build a response from a blog row and its (possibly missing) owner row."""
        date_format = "%Y-%m-%d %H:%M:%S"
        return cls(
            id=blog.id,
            title=blog.title,
            content=blog.content,
            category=blog.category,
            owner=OwnerSummary.model_validate(owner) if owner else None,
            created_at=blog.created_at.astimezone().strftime(date_format),
            updated_at=(
                blog.updated_at.astimezone().strftime(date_format)
                if blog.updated_at
                else "No updates"
            ),
        )


class PaginatedBlogs(BaseModel):
    """One page of blogs plus the total number of stored blogs."""

    data: list[BlogResponse]
    total: int
