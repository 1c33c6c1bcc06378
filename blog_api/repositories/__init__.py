from blog_api.repositories.blog import BlogRepository
from blog_api.repositories.protocols import BlogStore, RefAction, UserDirectory
from blog_api.repositories.user import UserRepository

__all__ = [
    "BlogRepository",
    "BlogStore",
    "RefAction",
    "UserDirectory",
    "UserRepository",
]
