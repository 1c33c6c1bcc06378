from blog_api.errors.base import InternalFailureError


class PasswordHashingError(InternalFailureError):
    """Base error for password hasher module."""

    def __init__(self, detail: str = "Password hashing failed") -> None:
        super().__init__(detail)
