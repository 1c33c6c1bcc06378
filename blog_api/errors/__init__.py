from blog_api.errors.auth import (
    DuplicateIdentityError,
    InvalidCredentialsError,
    UnauthorizedError,
    UserAuthenticationError,
)
from blog_api.errors.base import (
    BaseAppError,
    ClientInputError,
    InternalFailureError,
    NotFoundError,
    app_exception_handler,
    create_exception_handler,
)
from blog_api.errors.blog import (
    BlogNotFoundError,
    BlogPersistenceFailedError,
    InvalidIdentifierError,
    OwnershipSyncFailedError,
    RemovalFailedError,
)
from blog_api.errors.database import (
    DatabaseError,
    DatabaseWriteError,
    DuplicateEntryError,
    database_exception_handler,
)
from blog_api.errors.password_hasher import PasswordHashingError
from blog_api.errors.validation import validation_exception_handler

__all__ = [
    "BaseAppError",
    "BlogNotFoundError",
    "BlogPersistenceFailedError",
    "ClientInputError",
    "DatabaseError",
    "DatabaseWriteError",
    "DuplicateEntryError",
    "DuplicateIdentityError",
    "InternalFailureError",
    "InvalidCredentialsError",
    "InvalidIdentifierError",
    "NotFoundError",
    "OwnershipSyncFailedError",
    "PasswordHashingError",
    "RemovalFailedError",
    "UnauthorizedError",
    "UserAuthenticationError",
    "app_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "validation_exception_handler",
]
