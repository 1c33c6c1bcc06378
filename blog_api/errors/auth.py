"""Authentication and authorization errors."""

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED, HTTP_409_CONFLICT

from blog_api.errors.base import BaseAppError


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when no identity exists for the supplied email."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials", HTTP_400_BAD_REQUEST)


class UnauthorizedError(UserAuthenticationError):
    """Raised for a wrong password, a missing identity or a failed ownership check."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class DuplicateIdentityError(UserAuthenticationError):
    """Raised when signing up with an email that is already registered."""

    def __init__(self) -> None:
        super().__init__("Email already in use", HTTP_409_CONFLICT)
