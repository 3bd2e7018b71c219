from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
import sqlalchemy as sa


# Settings are instantiated at import time; keep test runs out of "production".
os.environ.setdefault("ENVIRONMENT", "test")

# Ensure the repo root is importable when the package is not installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(scope="session")
def postgres_url():
    # SQLite by default; STUHOUSES_TEST_POSTGRES=1 runs the same suite against a real PostgreSQL.
    if os.getenv("STUHOUSES_TEST_POSTGRES") != "1":
        yield None
        return
    from testcontainers.postgres import PostgresContainer

    with PostgresContainer("postgres:16") as pg:
        yield pg.get_connection_url()


@pytest.fixture()
def database_url(tmp_path: Path, postgres_url: str | None):
    if postgres_url is None:
        yield f"sqlite:///{tmp_path / 'stuhouses.db'}"
        return

    yield postgres_url

    from stuhouses.engine import create_engine

    engine = create_engine(postgres_url)
    with engine.begin() as conn:
        conn.execute(sa.text("DROP SCHEMA public CASCADE"))
        conn.execute(sa.text("CREATE SCHEMA public"))
    engine.dispose()


@pytest.fixture()
def migrated_url(database_url: str) -> str:
    from stuhouses.migrate import upgrade

    upgrade(database_url, "head")
    return database_url


@pytest.fixture()
def seeded_url(migrated_url: str) -> str:
    from stuhouses.seed import run_seeds

    run_seeds(migrated_url, environment="test")
    return migrated_url


@pytest.fixture()
def engine(migrated_url: str):
    from stuhouses.engine import create_engine

    eng = create_engine(migrated_url)
    yield eng
    eng.dispose()


@pytest.fixture()
def seeded_engine(seeded_url: str):
    from stuhouses.engine import create_engine

    eng = create_engine(seeded_url)
    yield eng
    eng.dispose()


@pytest.fixture()
def restore_logging():
    # configure_logging installs a root handler and global structlog config; undo both.
    import logging

    import structlog

    root = logging.getLogger()
    level = root.level
    yield
    for handler in [h for h in root.handlers if h.get_name() == "stuhouses"]:
        root.removeHandler(handler)
    root.setLevel(level)
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
