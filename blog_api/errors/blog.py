"""Errors raised by the blog ownership flows."""

from blog_api.errors.base import ClientInputError, InternalFailureError, NotFoundError


class InvalidIdentifierError(ClientInputError):
    """Raised when an id is not a syntactically valid store identifier."""

    def __init__(self, detail: str = "Invalid blog ID") -> None:
        super().__init__(detail)


class BlogNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Blog not found")


class BlogPersistenceFailedError(InternalFailureError):
    """The blog row could not be written."""

    def __init__(self) -> None:
        super().__init__("Failed to create blog")


class OwnershipSyncFailedError(InternalFailureError):
    """The owner's blog list could not be updated after the blog was written."""

    def __init__(self) -> None:
        super().__init__("Failed to update user blogs")


class RemovalFailedError(InternalFailureError):
    def __init__(self) -> None:
        super().__init__("Failed to remove blog")
