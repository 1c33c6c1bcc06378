"""Blog database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime, Index
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    Every blog references exactly one owner through `owner_id`.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (Index("ix_blogs_owner_category", "owner_id", "category"),)

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )
    owner_id: UUID = Field(
        sa_column=Column(
            "owner_id",
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Owner ID (foreign key to users.id)",
    )
    title: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Blog title",
    )
    content: str = Field(
        sa_column=Column(String(1200), nullable=False),
        description="Blog content",
    )
    category: str = Field(
        sa_column=Column(String(100), nullable=False, index=True),
        description="Blog category",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "owner_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Test Blog",
                "content": "This is a test blog.",
                "category": "Tech",
            },
        },
    )
