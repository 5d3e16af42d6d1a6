"""
Database engine configuration.

Builds the async URL and engine options from config and provides the
database-creation and migration helpers used by scripts/migrate.py.
"""
import asyncio
import functools
import logging
from pathlib import Path
from typing import Any

from alembic import command
from alembic.config import Config as alembic_config
from sqlalchemy import text
from sqlalchemy.engine.url import URL
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import create_async_engine

from carbon_tracker.core.config import Config

DEFAULT_DRIVERNAME = "postgresql+asyncpg"

engine_kw = {
    "pool_pre_ping": True,
    # emits "SELECT 1" each time a connection is checked out from the pool
    "pool_size": 2,  # number of connections to keep open at a time
    "max_overflow": 4,  # number of connections to allow to be opened above pool_size
    "pool_recycle": 3600,
    "connect_args": {
        "prepared_statement_cache_size": 0,  # disable prepared statement cache
        "statement_cache_size": 0,  # disable statement cache
    },
}

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def get_db_url(config: Config) -> URL:
    """
    Construct the async database URL from the [db] config section.
    """
    config_db = dict(config.data["db"])
    drivername = config_db.pop("drivername", DEFAULT_DRIVERNAME)
    return URL.create(drivername=drivername, **config_db)


def get_engine_kw(async_db_url: URL) -> dict[str, Any]:
    """
    Engine options for the given URL.

    Pool sizing and the asyncpg statement cache settings only apply to
    PostgreSQL; SQLite runs with the driver defaults.
    """
    if async_db_url.get_backend_name() == "sqlite":
        return {}
    return engine_kw


async def create_database(config: Config) -> bool:
    """
    Ensures the PostgreSQL database named in the config exists.

    Connects to the 'postgres' maintenance database to issue CREATE DATABASE.

    Returns:
        True if the database was created, False if it already existed.

    Raises:
        ValueError: If the database name is missing in the configuration.
    """
    logging.info("Creating database...")
    db_params = dict(config.data["db"])
    drivername = db_params.pop("drivername", DEFAULT_DRIVERNAME)
    target_database_name = db_params.pop("database", None)

    if not target_database_name:
        logging.error("Database name not found in configuration for creation.")
        raise ValueError("Database name missing in configuration for creation.")

    if not drivername.startswith("postgresql"):
        logging.info(f"Skipping database creation for driver {drivername}")
        return False

    maintenance_url = URL.create(
        drivername=drivername, **{**db_params, "database": "postgres"}
    )
    maintenance_engine = create_async_engine(maintenance_url)
    try:
        async with maintenance_engine.connect() as connection:
            # CREATE DATABASE cannot run inside a transaction block
            autocommit_connection = await connection.execution_options(
                isolation_level="AUTOCOMMIT"
            )
            await autocommit_connection.execute(
                text(f'CREATE DATABASE "{target_database_name}"')
            )
        logging.info(f"Database '{target_database_name}' created successfully.")
        return True
    except DBAPIError as e:
        # 42P04 is duplicate_database
        if getattr(e.orig, "pgcode", None) == "42P04" or "already exists" in str(e):
            logging.warning(
                f"Database '{target_database_name}' already exists. No action taken."
            )
            return False

        logging.error(
            f"A DBAPIError occurred while trying to create database '{target_database_name}': {e}"
        )
        raise
    finally:
        await maintenance_engine.dispose()


async def apply_db_migration(config: Config):
    """
    Create the database if needed and upgrade it to the latest Alembic revision.

    Alembic runs synchronously, so the upgrade is pushed to the default
    executor and awaited.
    """
    await create_database(config)

    alembic_cfg = alembic_config(str(PROJECT_ROOT / "alembic.ini"))
    alembic_cfg.set_main_option(
        "script_location", str(PROJECT_ROOT / "alembic_migrations")
    )

    async_url = get_db_url(config)
    alembic_cfg.set_main_option(
        "sqlalchemy.url", async_url.render_as_string(hide_password=False)
    )

    logging.info("Starting database migrations...")
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(
        None, functools.partial(command.upgrade, alembic_cfg, "head")
    )
    logging.info("Database migration completed successfully")
