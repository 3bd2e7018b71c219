from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

import sqlalchemy as sa
from dateutil.relativedelta import relativedelta

from stuhouses import schema
from stuhouses.schema import AvailabilityStatus
from stuhouses.seeds.base import SeedContext, SeedResult
from stuhouses.seeds.lookups import city_ids, feature_ids, require
from stuhouses.seeds.sequences import sync_sequence


NAME = "properties"
DESTRUCTIVE = True


@dataclass(frozen=True)
class ImageSpec:
    url: str
    description: str


@dataclass(frozen=True)
class PropertySpec:
    # Explicit ids: the additional-properties seed reserves its own range.
    id: int
    title: str
    slug: str
    description: str
    city_slug: str
    address_line_1: str
    postcode: str
    latitude: float
    longitude: float
    bedrooms: int
    bathrooms: int
    price_per_person_per_week: Decimal
    bills_included: bool
    available_from: date
    property_type: str
    is_featured: bool
    address_line_2: str | None = None
    images: tuple[ImageSpec, ...] = ()
    features: tuple[str, ...] = ()


PROPERTY_SPECS: list[PropertySpec] = [
    PropertySpec(
        id=1,
        title="Modern 4-Bed Student House in Headingley",
        slug="modern-4-bed-student-house-headingley",
        description=(
            "Spacious and modern 4-bedroom student house in the heart of Headingley, "
            "perfect for students at Leeds University."
        ),
        city_slug="leeds",
        address_line_1="42 Headingley Lane",
        address_line_2="Headingley",
        postcode="LS6 1BN",
        latitude=53.8178,
        longitude=-1.5780,
        bedrooms=4,
        bathrooms=2,
        price_per_person_per_week=Decimal("95.00"),
        bills_included=True,
        available_from=date(2025, 9, 1),
        property_type="house",
        is_featured=True,
        images=(
            ImageSpec("https://images.pexels.com/photos/106399/pexels-photo-106399.jpeg", "Primary property image"),
            ImageSpec("https://images.pexels.com/photos/1648768/pexels-photo-1648768.jpeg", "Bedroom image"),
            ImageSpec("https://images.pexels.com/photos/3016430/pexels-photo-3016430.jpeg", "Kitchen image"),
        ),
        features=("WiFi", "Furnished", "Double Bed", "Washing Machine", "Garden"),
    ),
    PropertySpec(
        id=2,
        title="Luxury 5-Bed Student House in Fallowfield",
        slug="luxury-5-bed-student-house-fallowfield",
        description="High-end 5-bedroom student house in popular Fallowfield area with all modern amenities.",
        city_slug="manchester",
        address_line_1="28 Wilmslow Road",
        address_line_2="Fallowfield",
        postcode="M14 6AD",
        latitude=53.4395,
        longitude=-2.2193,
        bedrooms=5,
        bathrooms=3,
        price_per_person_per_week=Decimal("110.00"),
        bills_included=True,
        available_from=date(2025, 9, 1),
        property_type="house",
        is_featured=True,
        images=(
            ImageSpec("https://images.pexels.com/photos/1396132/pexels-photo-1396132.jpeg", "Primary property image"),
            ImageSpec("https://images.pexels.com/photos/1457842/pexels-photo-1457842.jpeg", "Living room image"),
            ImageSpec("https://images.pexels.com/photos/1910472/pexels-photo-1910472.jpeg", "Bathroom image"),
        ),
        features=("WiFi", "Furnished", "Double Bed", "Washing Machine", "Dishwasher", "TV"),
    ),
    PropertySpec(
        id=3,
        title="Large 6-Bed House in Selly Oak",
        slug="large-6-bed-house-selly-oak",
        description="Spacious 6-bedroom house in Selly Oak, perfect for University of Birmingham students.",
        city_slug="birmingham",
        address_line_1="156 Bristol Road",
        address_line_2="Selly Oak",
        postcode="B29 6BJ",
        latitude=52.4454,
        longitude=-1.9308,
        bedrooms=6,
        bathrooms=2,
        price_per_person_per_week=Decimal("90.00"),
        bills_included=False,
        available_from=date(2025, 9, 1),
        property_type="house",
        is_featured=True,
        images=(
            ImageSpec("https://images.pexels.com/photos/323780/pexels-photo-323780.jpeg", "Primary property image"),
            ImageSpec("https://images.pexels.com/photos/3773575/pexels-photo-3773575.png", "Bedroom image"),
            ImageSpec("https://images.pexels.com/photos/1080721/pexels-photo-1080721.jpeg", "Kitchen image"),
        ),
        features=("WiFi", "Furnished", "Double Bed", "Study Desk", "Garden", "Parking"),
    ),
]


def property_row(spec: PropertySpec, cities: Mapping[str, int]) -> dict[str, Any]:
    return dict(
        id=spec.id,
        title=spec.title,
        slug=spec.slug,
        description=spec.description,
        city_id=require(cities, spec.city_slug, kind="city"),
        address_line_1=spec.address_line_1,
        address_line_2=spec.address_line_2,
        postcode=spec.postcode,
        latitude=spec.latitude,
        longitude=spec.longitude,
        bedrooms=spec.bedrooms,
        bathrooms=spec.bathrooms,
        price_per_person_per_week=spec.price_per_person_per_week,
        bills_included=spec.bills_included,
        available_from=spec.available_from,
        property_type=spec.property_type,
        is_featured=spec.is_featured,
    )


def insert_listing_details(
    conn: sa.Connection,
    spec: PropertySpec,
    feature_names: Iterable[str],
    features: Mapping[str, int],
) -> None:
    """Images, feature links and a one-year availability window for an inserted property."""
    if spec.images:
        conn.execute(
            sa.insert(schema.property_images),
            [
                dict(
                    property_id=spec.id,
                    url=image.url,
                    # First image is the primary one; one per property by convention.
                    is_primary=order == 1,
                    description=image.description,
                    display_order=order,
                )
                for order, image in enumerate(spec.images, start=1)
            ],
        )

    feature_rows = [
        {"property_id": spec.id, "feature_id": require(features, name, kind="feature")} for name in feature_names
    ]
    if feature_rows:
        conn.execute(sa.insert(schema.property_features), feature_rows)

    conn.execute(
        sa.insert(schema.property_availability),
        dict(
            property_id=spec.id,
            start_date=spec.available_from,
            end_date=spec.available_from + relativedelta(years=1),
            status=AvailabilityStatus.AVAILABLE.value,
        ),
    )


def run(conn: sa.Connection, ctx: SeedContext) -> SeedResult:
    result = SeedResult(name=NAME)

    # Children first, then restart their sequences so demo ids stay stable across runs.
    children = [schema.property_features, schema.property_images, schema.property_availability]
    for table in children:
        conn.execute(sa.delete(table))
    result.deleted = conn.execute(sa.delete(schema.properties)).rowcount
    for table in children:
        sync_sequence(conn, table)

    cities = city_ids(conn)
    features = feature_ids(conn)

    conn.execute(sa.insert(schema.properties), [property_row(spec, cities) for spec in PROPERTY_SPECS])
    for spec in PROPERTY_SPECS:
        insert_listing_details(conn, spec, spec.features, features)
    result.inserted = len(PROPERTY_SPECS)

    for table in [schema.properties, *children]:
        sync_sequence(conn, table)
    return result
