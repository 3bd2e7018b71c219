from __future__ import annotations

from dataclasses import dataclass

import sqlalchemy as sa

from stuhouses import schema
from stuhouses.seeds.base import SeedContext, SeedResult
from stuhouses.slugs import slugify


NAME = "cities"
DESTRUCTIVE = True


@dataclass(frozen=True)
class CitySpec:
    name: str
    description: str
    image_url: str
    # Marketing figure shown on the city cards, not a live count.
    property_count: int

    @property
    def slug(self) -> str:
        return slugify(self.name)


CITY_SPECS: list[CitySpec] = [
    CitySpec(
        name="Leeds",
        description="Leeds is a vibrant city in West Yorkshire with a large student population.",
        image_url="https://images.pexels.com/photos/6004743/pexels-photo-6004743.jpeg",
        property_count=2043,
    ),
    CitySpec(
        name="Manchester",
        description="Manchester is one of the most popular student cities.",
        image_url=(
            "https://images.pexels.com/photos/18595114/pexels-photo-18595114/"
            "free-photo-of-view-of-city-center-of-manchester-england.jpeg"
        ),
        property_count=1856,
    ),
    CitySpec(
        name="Birmingham",
        description=(
            "Birmingham is the UK's second largest city and hosts five universities "
            "with a diverse and lively student community."
        ),
        image_url="https://images.pexels.com/photos/14250753/pexels-photo-14250753.jpeg",
        property_count=1522,
    ),
    CitySpec(
        name="Liverpool",
        description=(
            "Liverpool offers students a rich cultural heritage, affordable living, and a legendary music scene."
        ),
        image_url=(
            "https://images.pexels.com/photos/17080448/pexels-photo-17080448/"
            "free-photo-of-the-albert-dock-in-liverpool-uk.jpeg"
        ),
        property_count=1345,
    ),
    CitySpec(
        name="Nottingham",
        description=(
            "Nottingham is home to two major universities and offers a perfect blend of history, "
            "culture, and modern amenities for students."
        ),
        image_url=(
            "https://images.pexels.com/photos/18450858/pexels-photo-18450858/free-photo-of-church-in-nottingham.jpeg"
        ),
        property_count=1298,
    ),
    CitySpec(
        name="Sheffield",
        description=(
            "Sheffield is known for its friendly atmosphere, affordability, and proximity to the "
            "stunning Peak District National Park."
        ),
        image_url="https://images.pexels.com/photos/14421063/pexels-photo-14421063.jpeg",
        property_count=1187,
    ),
    CitySpec(
        name="Bristol",
        description=(
            "Bristol is a creative hub with a thriving arts scene, independent shops, and a strong sense of community."
        ),
        image_url="https://images.pexels.com/photos/7282828/pexels-photo-7282828.jpeg",
        property_count=1076,
    ),
    CitySpec(
        name="London",
        description=(
            "London offers unparalleled opportunities for students with its world-class universities, "
            "cultural diversity, and career prospects."
        ),
        image_url="https://images.pexels.com/photos/460672/pexels-photo-460672.jpeg",
        property_count=3452,
    ),
    CitySpec(
        name="Newcastle",
        description=(
            "Newcastle boasts a legendary nightlife, friendly locals, and affordable living for its "
            "large student population."
        ),
        image_url="https://images.pexels.com/photos/13516347/pexels-photo-13516347.jpeg",
        property_count=967,
    ),
    CitySpec(
        name="Edinburgh",
        description=(
            "Edinburgh combines historic charm with a modern outlook, offering students a unique "
            "living experience in Scotland's capital."
        ),
        image_url="https://images.pexels.com/photos/1470405/pexels-photo-1470405.jpeg",
        property_count=1243,
    ),
]


def run(conn: sa.Connection, ctx: SeedContext) -> SeedResult:
    result = SeedResult(name=NAME)
    # Replace the whole reference set; properties and universities keep their rows (SET NULL).
    result.deleted = conn.execute(sa.delete(schema.cities)).rowcount
    conn.execute(
        sa.insert(schema.cities),
        [
            dict(
                name=spec.name,
                slug=spec.slug,
                description=spec.description,
                image_url=spec.image_url,
                property_count=spec.property_count,
            )
            for spec in CITY_SPECS
        ],
    )
    result.inserted = len(CITY_SPECS)
    return result
