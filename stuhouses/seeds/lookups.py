from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import sqlalchemy as sa

from stuhouses import schema


class MissingReferenceError(LookupError):
    """A seed referenced a natural key (slug, name) that no earlier seed inserted."""


def build_lookup(rows: Iterable[Mapping[str, Any]], key: str, value: str = "id") -> dict[Any, Any]:
    return {row[key]: row[value] for row in rows}


def require(lookup: Mapping[Any, Any], key: Any, *, kind: str) -> Any:
    try:
        return lookup[key]
    except KeyError:
        raise MissingReferenceError(f"{kind} {key!r} not found; run its seed first") from None


def city_ids(conn: sa.Connection) -> dict[str, int]:
    rows = conn.execute(sa.select(schema.cities.c.id, schema.cities.c.slug)).mappings()
    return build_lookup(rows, "slug")


def feature_ids(conn: sa.Connection) -> dict[str, int]:
    rows = conn.execute(sa.select(schema.features.c.id, schema.features.c.name)).mappings()
    return build_lookup(rows, "name")
