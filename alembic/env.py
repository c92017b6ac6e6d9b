"""Alembic environment for PropTrack.

The database URL comes from ``PROPTRACK_DB_DATABASE_URL`` (see
``proptrack.core.config.DBConfig``); migrations run over the async engine.
"""
from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from proptrack.core.config import DBConfig
from proptrack.db.base import Base
from proptrack.db.engine import DatabaseManager

import proptrack.db.models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    url = DBConfig().database_url or config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError("Set PROPTRACK_DB_DATABASE_URL to run migrations")
    return url


def run_migrations_offline() -> None:
    """Emit SQL to the script output without connecting."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    db = DatabaseManager(_database_url())
    async with db.engine.connect() as connection:
        await connection.run_sync(_run_sync)
    await db.close()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
