from __future__ import annotations

import sqlalchemy as sa


def sync_sequence(conn: sa.Connection, table: sa.Table) -> None:
    """
    Point the `id` sequence of `table` past its largest id.

    Needed after inserting rows with explicit ids on PostgreSQL. An empty table restarts at 1.
    SQLite derives the next rowid from the table itself, so there is nothing to do.
    """
    if conn.dialect.name != "postgresql":
        return
    name = table.name
    conn.execute(
        sa.text(
            f"SELECT setval(pg_get_serial_sequence('{name}', 'id'), "
            f"COALESCE((SELECT MAX(id) FROM {name}), 1), "
            f"(SELECT MAX(id) FROM {name}) IS NOT NULL)"
        )
    )
