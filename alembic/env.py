"""
Alembic environment for the blog API.

Migrations run against `Settings.DATABASE_URL` through the asyncpg driver,
with `SQLModel.metadata` (users and blogs) as the autogenerate target.
Pass ``-x db_url=...`` to point a single run at another database.
"""

from asyncio import run as asyncio_run
from logging.config import fileConfig
from typing import Any

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config
from sqlmodel import SQLModel

from alembic import context
from blog_api.configs import settings
from blog_api.models import BlogDB, UserDB

MANAGED_TABLES = frozenset({UserDB.__tablename__, BlogDB.__tablename__})

config = context.config
config.set_main_option(
    "sqlalchemy.url",
    context.get_x_argument(as_dictionary=True).get("db_url", settings.DATABASE_URL),
)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def include_name(name: str | None, type_: str, parent_names: dict[str, Any]) -> bool:
    """Leave tables owned by other services out of autogenerate."""
    if type_ == "table":
        return name in MANAGED_TABLES
    return True


def configure_context(**kwargs: Any) -> None:
    context.configure(
        target_metadata=SQLModel.metadata,
        include_name=include_name,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting to the database."""
    configure_context(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    configure_context(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply migrations over an async connection."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio_run(run_migrations_online())
