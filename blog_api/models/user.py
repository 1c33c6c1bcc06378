"""User database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class UserDB(SQLModel, table=True):
    """
    User database model.

    `owned_blog_ids` is the denormalized, ordered list of the ids of the
    blogs this user owns. It is only changed through
    `UserRepository.update_blog_refs` and must be reassigned, never mutated
    in place, for the JSON column to be flushed.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="User ID",
    )
    name: str = Field(
        sa_column=Column(String(30), nullable=False),
        description="Display name",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique, case-sensitive)",
    )
    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Password record: <hex salt>.<hex derived key>",
    )
    owned_blog_ids: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Ids of the blogs owned by this user, in creation order",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
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
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Ann",
                "email": "ann@example.com",
                "owned_blog_ids": ["550e8400-e29b-41d4-a716-446655440000"],
            },
        },
    )
