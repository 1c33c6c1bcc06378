"""Database engine and session helpers."""

from blog_api.db.database import (
    async_session_maker,
    check_database,
    close_db,
    engine,
    get_session,
    init_db,
    transaction,
)

__all__ = [
    "async_session_maker",
    "check_database",
    "close_db",
    "engine",
    "get_session",
    "init_db",
    "transaction",
]
