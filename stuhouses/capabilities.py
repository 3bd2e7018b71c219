from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import sqlalchemy as sa


NameStyle = Literal["split", "single", "none"]


@dataclass(frozen=True)
class SchemaCapabilities:
    """
    Optional `users` columns the user seed may populate.

    Seeds take this as input instead of probing the database row by row. The canonical schema
    is described by CANONICAL_CAPABILITIES; `detect_capabilities` builds one for a database
    created by an older schema generation.
    """

    has_users_table: bool = True
    # "split": first_name/last_name, "single": name, "none": neither.
    name_style: NameStyle = "split"
    has_is_verified: bool = True
    has_phone: bool = True


CANONICAL_CAPABILITIES = SchemaCapabilities()


def detect_capabilities(conn: sa.Connection) -> SchemaCapabilities:
    inspector = sa.inspect(conn)
    if not inspector.has_table("users"):
        return SchemaCapabilities(has_users_table=False, name_style="none", has_is_verified=False, has_phone=False)

    columns = {c["name"] for c in inspector.get_columns("users")}
    if {"first_name", "last_name"} <= columns:
        name_style: NameStyle = "split"
    elif "name" in columns:
        name_style = "single"
    else:
        name_style = "none"
    return SchemaCapabilities(
        has_users_table=True,
        name_style=name_style,
        has_is_verified="is_verified" in columns,
        has_phone="phone" in columns,
    )
