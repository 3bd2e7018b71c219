from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.pool import NullPool


def normalize_url(url: str) -> str:
    # Migrations and seeds use a sync driver. Normalize common runtime URLs to psycopg3.
    url = url.replace("postgresql+asyncpg://", "postgresql+psycopg://")
    url = url.replace("postgresql+psycopg2://", "postgresql+psycopg://")
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: str) -> sa.Engine:
    # NullPool: migrations and seeds are short-lived batch jobs.
    engine = sa.create_engine(normalize_url(database_url), poolclass=NullPool, future=True)
    if engine.dialect.name == "sqlite":
        # SQLite ignores ON DELETE policies unless enabled per connection.
        sa.event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine
