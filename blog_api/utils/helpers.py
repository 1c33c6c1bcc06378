from datetime import datetime
from uuid import UUID

from fastapi import Request
from starlette.routing import Match


def host(request: Request) -> str:
    """Return the client IP address."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return the current local time as a string."""
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def parse_uuid(value: str) -> UUID | None:
    """Parse a store identifier, returning None when it is not a valid UUID."""
    try:
        return UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return None


def route_summary(request: Request) -> str | None:
    """Summary (or name) of the first route that fully matches the request."""
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "summary", None) or getattr(route, "name", None)
    return None
