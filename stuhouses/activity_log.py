"""
Append-only audit log.

Admin handlers append one row per mutating action. Rows are never updated or deleted here;
deleting a user nulls `user_id` on their rows instead of removing them.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict

from stuhouses import schema


class ActivityLogError(ValueError):
    pass


class ActivityLogEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int
    user_id: int | None
    action: str
    resource_type: str
    resource_id: int | None
    # Shape varies per action; stored as an opaque document.
    details: Any = None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _as_document(details: Any) -> Any:
    try:
        # JSONB has no NaN or Infinity.
        return json.loads(json.dumps(details, allow_nan=False))
    except (TypeError, ValueError) as e:
        raise ActivityLogError(f"details must be JSON serializable: {e}") from e


def append(
    conn: sa.Connection,
    *,
    action: str,
    resource_type: str,
    user_id: int | None = None,
    resource_id: int | None = None,
    details: Any = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> int:
    """Insert one audit row inside the caller's transaction and return its id."""
    if not action or not action.strip():
        raise ActivityLogError("action is required")
    if not resource_type or not resource_type.strip():
        raise ActivityLogError("resource_type is required")

    stmt = (
        sa.insert(schema.activity_logs)
        .values(
            user_id=user_id,
            action=action.strip(),
            resource_type=resource_type.strip(),
            resource_id=resource_id,
            details=None if details is None else _as_document(details),
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=_now(),
        )
    )
    return conn.execute(stmt).inserted_primary_key[0]


def query(
    conn: sa.Connection,
    *,
    user_id: int | None = None,
    resource_type: str | None = None,
    resource_id: int | None = None,
    since: datetime | None = None,
    until: datetime | None = None,
    limit: int | None = 100,
) -> list[ActivityLogEntry]:
    """
    Newest first. `since` is inclusive, `until` exclusive.

    Filters combine with AND; omitting all of them returns the latest `limit` rows.
    """
    logs = schema.activity_logs
    q = sa.select(logs)
    if user_id is not None:
        q = q.where(logs.c.user_id == user_id)
    if resource_type is not None:
        q = q.where(logs.c.resource_type == resource_type)
    if resource_id is not None:
        q = q.where(logs.c.resource_id == resource_id)
    if since is not None:
        q = q.where(logs.c.created_at >= since)
    if until is not None:
        q = q.where(logs.c.created_at < until)
    q = q.order_by(logs.c.created_at.desc(), logs.c.id.desc())
    if limit is not None:
        q = q.limit(limit)
    return [ActivityLogEntry.model_validate(dict(row)) for row in conn.execute(q).mappings()]


def recent(conn: sa.Connection, limit: int = 10) -> list[ActivityLogEntry]:
    return query(conn, limit=limit)
