from __future__ import annotations

import random
from datetime import date
from decimal import Decimal

import sqlalchemy as sa

from stuhouses import schema
from stuhouses.logging import logger
from stuhouses.seeds.base import SeedContext, SeedResult
from stuhouses.seeds.lookups import city_ids, feature_ids
from stuhouses.seeds.properties import ImageSpec, PropertySpec, insert_listing_details, property_row
from stuhouses.seeds.sequences import sync_sequence


NAME = "additional_properties"
DESTRUCTIVE = False

_IMAGES = (
    ImageSpec("https://images.pexels.com/photos/1643383/pexels-photo-1643383.jpeg", "Primary property image"),
    ImageSpec("https://images.pexels.com/photos/1454806/pexels-photo-1454806.jpeg", "Bedroom image"),
    ImageSpec("https://images.pexels.com/photos/1457842/pexels-photo-1457842.jpeg", "Living room image"),
)

BASE_FEATURES = ("WiFi", "Furnished", "Double Bed", "Washing Machine")
OPTIONAL_FEATURES = ("TV", "Garden", "Parking", "Dishwasher", "Study Desk")

# Ids 10+ so they never collide with the properties seed.
ADDITIONAL_PROPERTY_SPECS: list[PropertySpec] = [
    PropertySpec(
        id=10,
        title="5-Bed Student House on Faraday Road",
        slug="faraday-road",
        description=(
            "Spacious 5-bedroom student house on Faraday Road, perfect for groups of friends who want "
            "to live close to the university."
        ),
        city_slug="leeds",
        address_line_1="42 Faraday Road",
        address_line_2="Hyde Park",
        postcode="LS6 1BT",
        latitude=53.8133,
        longitude=-1.5681,
        bedrooms=5,
        bathrooms=2,
        price_per_person_per_week=Decimal("92.00"),
        bills_included=True,
        available_from=date(2025, 7, 1),
        property_type="house",
        is_featured=True,
        images=_IMAGES,
    ),
    PropertySpec(
        id=11,
        title="Student Studio Apartment in City Centre",
        slug="student-studio-city-centre-leeds",
        description=(
            "Modern studio apartment in Leeds city centre with excellent transport links to all universities."
        ),
        city_slug="leeds",
        address_line_1="15 Park Row",
        postcode="LS1 5JQ",
        latitude=53.7982,
        longitude=-1.5486,
        bedrooms=1,
        bathrooms=1,
        price_per_person_per_week=Decimal("145.00"),
        bills_included=True,
        available_from=date(2025, 6, 15),
        property_type="apartment",
        is_featured=False,
        images=_IMAGES,
    ),
    PropertySpec(
        id=12,
        title="3-Bed Apartment near Manchester University",
        slug="3-bed-apartment-manchester-university",
        description="Well-maintained 3-bedroom apartment within walking distance of Manchester University.",
        city_slug="manchester",
        address_line_1="24 Oxford Road",
        postcode="M13 9PR",
        latitude=53.4656,
        longitude=-2.2339,
        bedrooms=3,
        bathrooms=1,
        price_per_person_per_week=Decimal("105.00"),
        bills_included=False,
        available_from=date(2025, 8, 1),
        property_type="apartment",
        is_featured=False,
        images=_IMAGES,
    ),
]


def pick_features(slug: str, seed_value: int, available: set[str]) -> list[str]:
    """Base features plus a stable pseudo-random subset of the optional ones present in `available`."""
    rng = random.Random(f"{seed_value}:{slug}")
    extras = [name for name in OPTIONAL_FEATURES if rng.random() > 0.3 and name in available]
    return [*BASE_FEATURES, *extras]


def run(conn: sa.Connection, ctx: SeedContext) -> SeedResult:
    result = SeedResult(name=NAME)
    slugs = [spec.slug for spec in ADDITIONAL_PROPERTY_SPECS]
    existing = set(
        conn.execute(sa.select(schema.properties.c.slug).where(schema.properties.c.slug.in_(slugs))).scalars()
    )
    new_specs = [spec for spec in ADDITIONAL_PROPERTY_SPECS if spec.slug not in existing]
    result.skipped = len(existing)

    if not new_specs:
        logger.info("additional_properties_up_to_date", added=0, skipped=result.skipped)
        return result

    cities = city_ids(conn)
    features = feature_ids(conn)
    conn.execute(sa.insert(schema.properties), [property_row(spec, cities) for spec in new_specs])
    for spec in new_specs:
        insert_listing_details(conn, spec, pick_features(spec.slug, ctx.seed_value, set(features)), features)
    result.inserted = len(new_specs)

    sync_sequence(conn, schema.properties)
    logger.info("additional_properties_added", added=result.inserted, skipped=result.skipped)
    return result
