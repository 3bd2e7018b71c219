from __future__ import annotations

from dataclasses import dataclass

import sqlalchemy as sa

from stuhouses import schema
from stuhouses.seeds.base import SeedContext, SeedResult
from stuhouses.seeds.lookups import city_ids, require
from stuhouses.slugs import slugify


NAME = "universities"
DESTRUCTIVE = True


@dataclass(frozen=True)
class UniversitySpec:
    name: str
    city_slug: str
    description: str
    image_url: str

    @property
    def slug(self) -> str:
        return slugify(self.name)


_CAMPUS_IMAGE = "https://images.pexels.com/photos/159490/yale-university-landscape-universities-schools-159490.jpeg"

UNIVERSITY_SPECS: list[UniversitySpec] = [
    UniversitySpec(
        name="University of Leeds",
        city_slug="leeds",
        description=(
            "One of the UK's leading research universities, offering a diverse range of courses in a vibrant city."
        ),
        image_url="https://images.pexels.com/photos/267885/pexels-photo-267885.jpeg",
    ),
    UniversitySpec(
        name="Leeds Beckett University",
        city_slug="leeds",
        description=(
            "A modern university with a focus on practical, industry-relevant education across multiple campuses."
        ),
        image_url=_CAMPUS_IMAGE,
    ),
    UniversitySpec(
        name="University of Manchester",
        city_slug="manchester",
        description="A world-renowned institution with a rich academic heritage and cutting-edge research facilities.",
        image_url="https://images.pexels.com/photos/207692/pexels-photo-207692.jpeg",
    ),
    UniversitySpec(
        name="Manchester Metropolitan University",
        city_slug="manchester",
        description=(
            "A modern university with strong links to business and industry, offering practical, "
            "career-focused courses."
        ),
        image_url=_CAMPUS_IMAGE,
    ),
    UniversitySpec(
        name="University of Birmingham",
        city_slug="birmingham",
        description="A founding member of the Russell Group with a beautiful campus and outstanding research facilities.",
        image_url="https://images.pexels.com/photos/2662116/pexels-photo-2662116.jpeg",
    ),
    UniversitySpec(
        name="University of Liverpool",
        city_slug="liverpool",
        description="A research-focused university in the heart of Liverpool with a global reputation for excellence.",
        image_url="https://images.pexels.com/photos/1427541/pexels-photo-1427541.jpeg",
    ),
    UniversitySpec(
        name="University of Nottingham",
        city_slug="nottingham",
        description=(
            "A public research university with a global reputation for academic excellence and innovative teaching."
        ),
        image_url="https://images.pexels.com/photos/2305098/pexels-photo-2305098.jpeg",
    ),
    UniversitySpec(
        name="University of Sheffield",
        city_slug="sheffield",
        description="A leading research university known for its world-class teaching and vibrant student experience.",
        image_url="https://images.pexels.com/photos/1438072/pexels-photo-1438072.jpeg",
    ),
    UniversitySpec(
        name="University College London",
        city_slug="london",
        description=(
            "One of the world's top universities, located in the heart of London with a diverse and "
            "international student body."
        ),
        image_url="https://images.pexels.com/photos/256490/pexels-photo-256490.jpeg",
    ),
    UniversitySpec(
        name="Kings College London",
        city_slug="london",
        description=(
            "A prestigious Russell Group university in central London with a distinguished reputation "
            "in the humanities and sciences."
        ),
        image_url="https://images.pexels.com/photos/159494/book-glasses-read-study-159494.jpeg",
    ),
    UniversitySpec(
        name="Imperial College London",
        city_slug="london",
        description=(
            "A world-leading science-focused institution known for its excellence in engineering, "
            "medicine, and business."
        ),
        image_url="https://images.pexels.com/photos/159752/books-collection-library-159752.jpeg",
    ),
]


def run(conn: sa.Connection, ctx: SeedContext) -> SeedResult:
    result = SeedResult(name=NAME)
    result.deleted = conn.execute(sa.delete(schema.universities)).rowcount

    cities = city_ids(conn)
    rows = [
        dict(
            name=spec.name,
            slug=spec.slug,
            description=spec.description,
            image_url=spec.image_url,
            city_id=require(cities, spec.city_slug, kind="city"),
        )
        for spec in UNIVERSITY_SPECS
    ]
    conn.execute(sa.insert(schema.universities), rows)
    result.inserted = len(rows)
    return result
