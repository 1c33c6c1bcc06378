"""Storage errors raised by the SQL repositories."""

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_409_CONFLICT, HTTP_500_INTERNAL_SERVER_ERROR

from blog_api.errors.base import BaseAppError, app_exception_handler


class DatabaseError(BaseAppError):
    """A statement against the users or blogs table failed."""

    def __init__(
        self,
        detail: str = "Database Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class DatabaseWriteError(DatabaseError):
    """An insert, update or delete did not go through; the session was rolled back."""

    def __init__(self, detail: str = "Failed to write record") -> None:
        super().__init__(detail)


class DuplicateEntryError(DatabaseError):
    """A unique index (users.email) rejected the row."""

    def __init__(self, detail: str = "A record with this value already exists") -> None:
        super().__init__(detail, HTTP_409_CONFLICT)


async def database_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Render driver errors that escaped the repositories as an opaque 500.

    Reads go straight to the session without a wrapper, so their failures
    arrive here as raw ``SQLAlchemyError``. The driver message stays in the log.
    """
    error = DatabaseError()
    error.__cause__ = exc
    return await app_exception_handler(request, error)
