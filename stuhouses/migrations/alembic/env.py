from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context

from stuhouses.engine import create_engine, normalize_url
from stuhouses.settings import SETTINGS


# Alembic Config object, provides access to values within the .ini file.
config = context.config

# Interpret the config file for Python logging, unless the caller already configured it.
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _get_database_url() -> str:
    # An explicit URL from stuhouses.migrate wins over the environment.
    url = config.attributes.get("database_url") or os.getenv("DATABASE_URL")
    if url:
        return normalize_url(url)
    ini_url = config.get_main_option("sqlalchemy.url")
    if ini_url:
        return normalize_url(ini_url)
    return normalize_url(SETTINGS.database_url)


def run_migrations_offline() -> None:
    url = _get_database_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        transaction_per_migration=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(_get_database_url())

    with connectable.connect() as connection:
        # One transaction per revision: a failing revision rolls back alone on engines with
        # transactional DDL (PostgreSQL). SQLite's driver commits DDL as it goes.
        context.configure(connection=connection, compare_type=True, transaction_per_migration=True)
        with context.begin_transaction():
            context.run_migrations()
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
