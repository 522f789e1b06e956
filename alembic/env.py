"""Alembic environment — applies migrations to whichever store the API is configured for.

Invariants:
    - The target URL is Settings.store_url, so USE_LOCAL_STORE migrates the local
      SQLite file and DATABASE_URL (already rewritten for asyncpg) otherwise
    - Document is imported so Base.metadata is complete for autogenerate
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from events_api.config import get_settings
from events_api.db.base import Base
from events_api.models.document import Document  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
store_url = get_settings().store_url
# SQLite cannot ALTER most constraints in place
render_as_batch = store_url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit SQL for the configured store without connecting."""
    context.configure(
        url=store_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=render_as_batch,
    )
    with context.begin_transaction():
        context.run_migrations()


def _apply(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=render_as_batch,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = store_url
    engine = async_engine_from_config(
        configuration, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_apply)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
