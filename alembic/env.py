"""Alembic environment — migrations run against Settings.database_url.

The URL comes from pagequery.config, so DATABASE_URL, .env files and the
postgresql:// → postgresql+asyncpg:// rewrite behave exactly as in the app.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

import pagequery.models  # noqa: F401  (populates Base.metadata)
from pagequery.config import get_settings
from pagequery.db.base import Base

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

DATABASE_URL = get_settings().database_url


def _configure_and_run(**configure_kwargs) -> None:
    context.configure(target_metadata=Base.metadata, **configure_kwargs)
    with context.begin_transaction():
        context.run_migrations()


def _run_on_connection(connection: Connection) -> None:
    _configure_and_run(connection=connection)


async def _run_online() -> None:
    engine = create_async_engine(DATABASE_URL, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_run_on_connection)
    await engine.dispose()


if context.is_offline_mode():
    _configure_and_run(
        url=DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_run_online())
