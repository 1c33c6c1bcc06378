from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from structlog.stdlib import BoundLogger

from blog_api.monitoring import get_logger
from blog_api.utils.helpers import host

logger = get_logger(__name__)


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


class ClientInputError(BaseAppError):
    """Raised for malformed ids, missing fields and bad query parameters."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class NotFoundError(BaseAppError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class InternalFailureError(BaseAppError):
    """
    Opaque server fault.

    The detail sent to the client is fixed; the underlying cause travels on
    ``__cause__`` and is logged by the exception handler.
    """

    def __init__(self, detail: str = "Internal Server Error") -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", "Internal Server Error")

        if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            cause = exc.__cause__ or exc
            logger.error(
                f"{detail} for ip: {host(request)} for endpoint {request.url.path}",
                cause=repr(cause),
            )
        else:
            logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        return ORJSONResponse(content={"detail": detail}, status_code=status_code)

    return handler


app_exception_handler = create_exception_handler(logger)
