from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import sqlalchemy as sa

from stuhouses import schema
from stuhouses.capabilities import SchemaCapabilities
from stuhouses.logging import logger
from stuhouses.passwords import hash_password
from stuhouses.schema import UserRole
from stuhouses.seeds.base import SeedContext, SeedResult
from stuhouses.seeds.sequences import sync_sequence


NAME = "users"
DESTRUCTIVE = True


@dataclass(frozen=True)
class DemoAccount:
    id: int
    email: str
    # Development convenience only; stored as a bcrypt hash.
    password: str
    role: UserRole
    first_name: str
    last_name: str
    phone: str


DEMO_ACCOUNTS: list[DemoAccount] = [
    DemoAccount(
        id=1,
        email="admin@stuhouses.com",
        password="admin123",
        role=UserRole.ADMIN,
        first_name="Admin",
        last_name="User",
        phone="+44 7700 900000",
    ),
    DemoAccount(
        id=2,
        email="user@example.com",
        password="user123",
        role=UserRole.USER,
        first_name="Regular",
        last_name="User",
        phone="+44 7700 900123",
    ),
]


def build_rows(
    capabilities: SchemaCapabilities,
    hasher: Callable[[str], str] = hash_password,
) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for account in DEMO_ACCOUNTS:
        row: dict[str, Any] = {
            "id": account.id,
            "email": account.email,
            "password": hasher(account.password),
            "role": account.role.value,
        }
        if capabilities.name_style == "split":
            row["first_name"] = account.first_name
            row["last_name"] = account.last_name
        elif capabilities.name_style == "single":
            row["name"] = f"{account.first_name} {account.last_name}"
        if capabilities.has_is_verified:
            row["is_verified"] = True
        if capabilities.has_phone:
            row["phone"] = account.phone
        rows.append(row)
    return rows


def run(conn: sa.Connection, ctx: SeedContext) -> SeedResult:
    result = SeedResult(name=NAME)
    if not ctx.capabilities.has_users_table:
        logger.warning("seed_skipped", reason="users table does not exist")
        return result

    rows = build_rows(ctx.capabilities)
    # Lightweight table built from the row keys so older schema generations (e.g. `name`) work too.
    users = sa.table("users", *[sa.column(key) for key in rows[0]])

    result.deleted = conn.execute(sa.delete(users)).rowcount
    conn.execute(sa.insert(users), rows)
    result.inserted = len(rows)
    sync_sequence(conn, schema.users)

    if ctx.environment != "production":
        logger.info(
            "seed_demo_credentials",
            dev_only=True,
            accounts=[f"{a.email} / {a.password}" for a in DEMO_ACCOUNTS],
        )
    return result
