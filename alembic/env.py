"""
Alembic environment configuration.
Uses the same DatabaseConfig as the application for consistency.
"""

import asyncio
import os
import sys
from logging.config import fileConfig
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context
from dotenv import load_dotenv

# Add project to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from hospital.db.models import DbBaseModel
from common.config.initialize_config import get_config, initialize_config
from common.api_error import ConfigurationError

load_dotenv()
try:
    initialize_config()
except ConfigurationError as e:
    # Can't use logger yet, but that's OK - this is a fatal startup error
    print(f"FATAL: Configuration error:\n{e}")
    sys.exit(1)

# Alembic Config object
config = context.config

app_config = get_config()

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata for autogenerate
target_metadata = DbBaseModel.metadata


def get_url() -> str:
    """
    Async URL the application itself connects with.

    Migrations run through the same asyncpg/aiosqlite driver, so no
    separate sync driver is needed.
    """
    if not app_config.database:
        raise RuntimeError("Database configuration not found in environment (DB_URL or DB_HOST)")
    return app_config.database.get_connection_url(include_password=True)


def get_connect_args() -> dict:
    """asyncpg SSL flag matching the application's DB_SSL_MODE."""
    db_config = app_config.database
    if not db_config or db_config.is_sqlite or not db_config.ssl_mode:
        return {}
    if db_config.ssl_mode.value == "disable":
        return {"ssl": False}
    return {"ssl": db_config.ssl_mode.value}


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Calls to context.execute() emit SQL to script output.
    """
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=app_config.database.is_sqlite,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        # sqlite cannot ALTER most columns in place
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_url()

    # NullPool: migrations open exactly one connection
    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
        connect_args=get_connect_args(),
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
