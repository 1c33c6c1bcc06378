from blog_api.managers.password_manager import PasswordHasher
from blog_api.managers.rate_limiter import (
    READ_LIMIT,
    SIGNIN_LIMIT,
    SIGNUP_LIMIT,
    WRITE_LIMIT,
    limiter,
    rate_limit_exceeded_handler,
)
from blog_api.managers.token_manager import TokenManager

__all__ = [
    "READ_LIMIT",
    "SIGNIN_LIMIT",
    "SIGNUP_LIMIT",
    "WRITE_LIMIT",
    "PasswordHasher",
    "TokenManager",
    "limiter",
    "rate_limit_exceeded_handler",
]
