from blog_api.schemas.auth import SignIn, SignUp, Token, TokenData, password_weaknesses
from blog_api.schemas.blog import (
    BlogCreate,
    BlogResponse,
    BlogSummary,
    BlogUpdate,
    OwnerSummary,
    PaginatedBlogs,
)
from blog_api.schemas.health import HealthCheckResponse
from blog_api.schemas.user import UserResponse

__all__ = [
    "BlogCreate",
    "BlogResponse",
    "BlogSummary",
    "BlogUpdate",
    "HealthCheckResponse",
    "OwnerSummary",
    "PaginatedBlogs",
    "SignIn",
    "SignUp",
    "Token",
    "TokenData",
    "UserResponse",
    "password_weaknesses",
]
