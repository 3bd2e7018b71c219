from __future__ import annotations

import os
from pathlib import Path

import pytest
import sqlalchemy as sa


REVISIONS = [
    "0001_initial_schema",
    "0002_activity_logs",
    "0003_payment_tables",
    "0004_viewing_requests_and_blog",
]


def _snapshot(database_url: str) -> dict[str, tuple[list[str], list[str], list[str]]]:
    from stuhouses.engine import create_engine

    engine = create_engine(database_url)
    try:
        with engine.connect() as conn:
            insp = sa.inspect(conn)
            snapshot = {}
            for table in insp.get_table_names():
                if table == "alembic_version":
                    continue
                snapshot[table] = (
                    sorted(c["name"] for c in insp.get_columns(table)),
                    sorted(str(i["name"]) for i in insp.get_indexes(table)),
                    sorted(str(fk["referred_table"]) for fk in insp.get_foreign_keys(table)),
                )
            return snapshot
    finally:
        engine.dispose()


def test_revisions_are_ordered(database_url: str) -> None:
    from stuhouses.migrate import ordered_revisions, pending_revisions

    assert ordered_revisions(database_url) == REVISIONS
    assert pending_revisions(database_url) == REVISIONS


def test_upgrade_applies_all_revisions_in_order(database_url: str) -> None:
    from stuhouses.migrate import current_revision, pending_revisions, upgrade

    assert current_revision(database_url) is None
    assert upgrade(database_url) == REVISIONS
    assert current_revision(database_url) == REVISIONS[-1]
    assert pending_revisions(database_url) == []


def test_upgrade_is_idempotent(database_url: str) -> None:
    from stuhouses.migrate import current_revision, upgrade

    upgrade(database_url)
    before = _snapshot(database_url)
    assert upgrade(database_url) == []
    assert current_revision(database_url) == REVISIONS[-1]
    assert _snapshot(database_url) == before


@pytest.mark.parametrize("revision", REVISIONS)
def test_downgrade_right_after_upgrade_restores_schema(database_url: str, revision: str) -> None:
    from stuhouses.migrate import downgrade, upgrade

    idx = REVISIONS.index(revision)
    if idx:
        upgrade(database_url, REVISIONS[idx - 1])
    before = _snapshot(database_url)

    assert upgrade(database_url, revision) == [revision]
    assert _snapshot(database_url) != before

    assert downgrade(database_url, "-1") == [revision]
    assert _snapshot(database_url) == before


def test_downgrade_to_base_drops_every_table(database_url: str) -> None:
    from stuhouses.migrate import current_revision, downgrade, upgrade

    upgrade(database_url)
    assert downgrade(database_url, "base") == list(reversed(REVISIONS))
    assert current_revision(database_url) is None
    assert _snapshot(database_url) == {}


def test_downgrade_on_empty_database_is_noop(database_url: str) -> None:
    from stuhouses.migrate import downgrade

    assert downgrade(database_url, "base") == []


def test_head_schema_matches_table_metadata(migrated_url: str) -> None:
    from stuhouses.schema import metadata

    snapshot = _snapshot(migrated_url)
    assert set(snapshot) == set(metadata.tables)
    for name, table in metadata.tables.items():
        columns, indexes, _ = snapshot[name]
        assert columns == sorted(c.name for c in table.columns), name
        expected_indexes = {str(i.name) for i in table.indexes}
        assert expected_indexes <= set(indexes), name


_BROKEN_REVISION = '''
from alembic import op
import sqlalchemy as sa

revision = "9999_broken"
down_revision = "0004_viewing_requests_and_blog"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table("half_applied", sa.Column("id", sa.Integer(), primary_key=True))
    op.execute("ALTER TABLE no_such_table ADD COLUMN x INTEGER")


def downgrade() -> None:
    op.drop_table("half_applied")
'''


@pytest.mark.skipif(
    os.getenv("STUHOUSES_TEST_POSTGRES") != "1",
    reason="SQLite commits DDL as it goes; transactional DDL needs PostgreSQL",
)
def test_failing_revision_rolls_back_alone(database_url: str, tmp_path: Path) -> None:
    from alembic import command

    from stuhouses.engine import create_engine
    from stuhouses.migrate import ALEMBIC_INI, alembic_config, current_revision, upgrade

    upgrade(database_url, REVISIONS[2])

    extra = tmp_path / "versions"
    extra.mkdir()
    (extra / "9999_broken.py").write_text(_BROKEN_REVISION)
    cfg = alembic_config(database_url)
    versions = ALEMBIC_INI.parent / "alembic" / "versions"
    cfg.set_main_option("version_locations", os.pathsep.join([str(versions), str(extra)]))

    with pytest.raises(sa.exc.DBAPIError):
        command.upgrade(cfg, "head")

    # The revision before the broken one committed in its own transaction.
    assert current_revision(database_url) == REVISIONS[-1]
    engine = create_engine(database_url)
    try:
        with engine.connect() as conn:
            assert not sa.inspect(conn).has_table("half_applied")
    finally:
        engine.dispose()
