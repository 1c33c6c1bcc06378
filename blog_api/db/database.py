"""Database engine and session management."""

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from blog_api.configs import settings
from blog_api.monitoring import get_logger

logger = get_logger(__name__)

STATEMENT_TIMEOUT_MS = 30000
POOL_EVENTS = {"connect": "db_connection_opened", "checkin": "db_connection_returned"}


def _pool_tracer(event_name: str) -> Callable[[object, object], None]:
    def trace(dbapi_connection: object, connection_record: object) -> None:
        logger.debug(event_name)

    return trace


def _trace_pool(engine: AsyncEngine) -> None:
    """Log pool connects and check-ins; only wired up in DEBUG."""
    for pool_event, event_name in POOL_EVENTS.items():
        event.listen(engine.sync_engine, pool_event, _pool_tracer(event_name))


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_size=settings.POOL_SIZE,
    max_overflow=settings.MAX_OVERFLOW,
    pool_timeout=settings.POOL_TIMEOUT,
    pool_recycle=settings.POOL_RECYCLE,
    pool_pre_ping=True,
    connect_args={
        "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
        "server_settings": {
            "statement_timeout": str(STATEMENT_TIMEOUT_MS),
            "lock_timeout": str(STATEMENT_TIMEOUT_MS),
        },
    },
)

if settings.DEBUG:
    _trace_pool(engine)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    Yields:
        AsyncSession: Database session, committed when the request succeeds
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Commits on successful exit, rolls back on exception.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("transaction_rolled_back")
            raise


async def init_db() -> None:
    """
    Create tables defined in SQLModel models.

    Development convenience; production schemas are managed by Alembic.
    """
    async with engine.begin() as conn:
        # Registers users and blogs on the metadata
        from blog_api.models import BlogDB, UserDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("database_tables_ready")


async def close_db() -> None:
    """Dispose of the engine's pooled connections."""
    await engine.dispose()
    logger.info("database_pool_disposed")


async def check_database() -> bool:
    """Run a trivial query to tell whether the database answers."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("database_unreachable", error=repr(e))
        return False
    return True
