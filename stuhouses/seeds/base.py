from __future__ import annotations

from dataclasses import dataclass

from stuhouses.capabilities import CANONICAL_CAPABILITIES, SchemaCapabilities


@dataclass(frozen=True)
class SeedContext:
    capabilities: SchemaCapabilities = CANONICAL_CAPABILITIES
    seed_value: int = 1337
    environment: str = "development"


@dataclass
class SeedResult:
    name: str
    deleted: int = 0
    inserted: int = 0
    skipped: int = 0
