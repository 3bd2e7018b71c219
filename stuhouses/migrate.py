from __future__ import annotations

import argparse
import os
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from stuhouses.engine import create_engine
from stuhouses.logging import configure_logging, logger
from stuhouses.settings import SETTINGS


ALEMBIC_INI = Path(__file__).resolve().parent / "migrations" / "alembic.ini"


def alembic_config(database_url: str, *, configure_logger: bool = False) -> Config:
    cfg = Config(str(ALEMBIC_INI))
    # env.py reads these before falling back to DATABASE_URL and the ini file.
    cfg.attributes["database_url"] = database_url
    cfg.attributes["configure_logger"] = configure_logger
    return cfg


def ordered_revisions(database_url: str) -> list[str]:
    """Every known revision, oldest first."""
    script = ScriptDirectory.from_config(alembic_config(database_url))
    revisions = [rev.revision for rev in script.walk_revisions()]
    revisions.reverse()
    return revisions


def current_revision(database_url: str) -> str | None:
    """Revision recorded in `alembic_version`, or None for an unmigrated database."""
    engine = create_engine(database_url)
    try:
        with engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()
    finally:
        engine.dispose()


def pending_revisions(database_url: str) -> list[str]:
    """Revisions not yet applied, oldest first."""
    revisions = ordered_revisions(database_url)
    current = current_revision(database_url)
    if current is None:
        return revisions
    return revisions[revisions.index(current) + 1 :]


def _between(revisions: list[str], lower: str | None, upper: str | None) -> list[str]:
    start = 0 if lower is None else revisions.index(lower) + 1
    end = 0 if upper is None else revisions.index(upper) + 1
    return revisions[start:end]


def upgrade(database_url: str, revision: str = "head") -> list[str]:
    """
    Apply pending revisions up to `revision`, oldest first, and return the ones applied.

    Re-running against an up-to-date database applies nothing and is not an error; Alembic
    tracks applied state in `alembic_version`.
    """
    before = current_revision(database_url)
    if revision == "head" and not pending_revisions(database_url):
        logger.info("migration_upgrade_noop", revision=before)
        return []
    command.upgrade(alembic_config(database_url), revision)
    after = current_revision(database_url)
    applied = _between(ordered_revisions(database_url), before, after)
    logger.info("migration_upgrade", from_revision=before, to_revision=after, applied=applied)
    return applied


def downgrade(database_url: str, revision: str = "-1") -> list[str]:
    """Revert to `revision` ("-1" for one step, "base" for an empty schema); return reverted ones, newest first."""
    before = current_revision(database_url)
    if before is None:
        logger.info("migration_downgrade_noop")
        return []
    command.downgrade(alembic_config(database_url), revision)
    after = current_revision(database_url)
    reverted = _between(ordered_revisions(database_url), after, before)
    reverted.reverse()
    logger.info("migration_downgrade", from_revision=before, to_revision=after, reverted=reverted)
    return reverted


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply or revert StuHouses schema migrations.")
    parser.add_argument("--database-url", default=os.getenv("DATABASE_URL") or SETTINGS.database_url)
    sub = parser.add_subparsers(dest="cmd", required=True)
    up = sub.add_parser("upgrade", help="Apply pending migrations.")
    up.add_argument("revision", nargs="?", default="head")
    down = sub.add_parser("downgrade", help="Revert migrations.")
    down.add_argument("revision", nargs="?", default="-1")
    sub.add_parser("current", help="Print the applied revision.")
    sub.add_parser("pending", help="List revisions not yet applied.")
    args = parser.parse_args()

    configure_logging(SETTINGS.log_level, command=args.cmd)
    if args.cmd == "upgrade":
        upgrade(args.database_url, args.revision)
    elif args.cmd == "downgrade":
        downgrade(args.database_url, args.revision)
    elif args.cmd == "current":
        print(current_revision(args.database_url) or "base")
    else:
        for rev in pending_revisions(args.database_url):
            print(rev)


if __name__ == "__main__":
    main()
