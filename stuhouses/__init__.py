"""
StuHouses data layer: schema, migrations, seeds and the activity log.

Runtime DB access for the API lives elsewhere. This package owns repo-level DB operations:
- Alembic migrations and a programmatic runner
- Reference and demo data seeds
- The append-only activity log and payment status rules
"""
