"""Database models for the application."""

from blog_api.models.blog import BlogDB
from blog_api.models.user import UserDB

__all__ = ["BlogDB", "UserDB"]
