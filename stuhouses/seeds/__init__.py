"""
Reference and demo data seeds.

Each module exposes `NAME`, `DESTRUCTIVE` and `run(conn, ctx) -> SeedResult`. Order and
invocation live in `stuhouses.seed`.
"""
