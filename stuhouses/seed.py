from __future__ import annotations

import argparse
import json
import os
from collections.abc import Iterable
from dataclasses import asdict
from types import ModuleType

import structlog

from stuhouses.capabilities import SchemaCapabilities, detect_capabilities
from stuhouses.engine import create_engine
from stuhouses.logging import configure_logging, logger
from stuhouses.seeds import additional_properties, cities, features, properties, universities, users
from stuhouses.seeds.base import SeedContext, SeedResult
from stuhouses.settings import SETTINGS


# Run order. Later seeds resolve foreign keys against rows inserted by earlier ones.
SEEDS: dict[str, ModuleType] = {
    "00_users": users,
    "01_cities": cities,
    "02_universities": universities,
    "03_features": features,
    "04_properties": properties,
    "05_additional_properties": additional_properties,
}


class UnknownSeed(KeyError):
    pass


class SeedRefused(RuntimeError):
    """A destructive seed was asked to run against a production database."""


def _select(only: Iterable[str] | None) -> list[tuple[str, ModuleType]]:
    if only is None:
        return list(SEEDS.items())
    wanted = set()
    for name in only:
        # Accept both "01_cities" and "cities".
        match = next((key for key, module in SEEDS.items() if name in (key, module.NAME)), None)
        if match is None:
            raise UnknownSeed(name)
        wanted.add(match)
    return [(key, module) for key, module in SEEDS.items() if key in wanted]


def run_seeds(
    database_url: str,
    *,
    only: Iterable[str] | None = None,
    seed_value: int | None = None,
    environment: str | None = None,
    capabilities: SchemaCapabilities | None = None,
    force: bool = False,
) -> list[SeedResult]:
    """
    Run seeds in registry order against an already-migrated database.

    Each seed runs in its own transaction; the first failure aborts the run and propagates.
    Destructive seeds replace whole tables and refuse to run in production unless `force`.
    """
    environment = environment or SETTINGS.environment
    selected = _select(only)

    destructive = [key for key, module in selected if module.DESTRUCTIVE]
    if environment == "production" and destructive and not force:
        raise SeedRefused(f"refusing destructive seeds in production: {', '.join(destructive)}")

    engine = create_engine(database_url)
    results: list[SeedResult] = []
    try:
        if capabilities is None:
            with engine.connect() as conn:
                capabilities = detect_capabilities(conn)
        ctx = SeedContext(
            capabilities=capabilities,
            seed_value=SETTINGS.seed_value if seed_value is None else seed_value,
            environment=environment,
        )

        for key, module in selected:
            # Events logged inside the seed module carry its name too.
            with structlog.contextvars.bound_contextvars(seed=key):
                try:
                    with engine.begin() as conn:
                        result = module.run(conn, ctx)
                except Exception as e:
                    logger.error("seed_failed", error=str(e))
                    raise
                logger.info("seed_completed", **{k: v for k, v in asdict(result).items() if k != "name"})
            results.append(result)
    finally:
        engine.dispose()
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Populate reference and demo data.")
    parser.add_argument("--database-url", default=os.getenv("DATABASE_URL") or SETTINGS.database_url)
    parser.add_argument("--seed", type=int, default=SETTINGS.seed_value)
    parser.add_argument(
        "--only",
        default=None,
        help="Comma-separated seeds to run (e.g. cities,01_cities). Defaults to all, in order.",
    )
    parser.add_argument("--force", action="store_true", help="Allow destructive seeds in production.")
    args = parser.parse_args()

    configure_logging(SETTINGS.log_level, command="seed")
    only = None
    if args.only:
        only = [x.strip() for x in str(args.only).split(",") if x.strip()]
    results = run_seeds(args.database_url, only=only, seed_value=args.seed, force=args.force)

    print(json.dumps({"seed": args.seed, "results": [asdict(r) for r in results]}, indent=2))


if __name__ == "__main__":
    main()
