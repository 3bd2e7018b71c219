from __future__ import annotations

import sqlalchemy as sa

from stuhouses import schema
from stuhouses.seeds.base import SeedContext, SeedResult


NAME = "features"
DESTRUCTIVE = True

# (name, icon, category)
FEATURES: list[tuple[str, str, str]] = [
    ("WiFi", "wifi", "utility"),
    ("Bills Included", "cash", "utility"),
    ("Double Bed", "bed", "furniture"),
    ("Washing Machine", "washing-machine", "appliance"),
    ("Dishwasher", "dishwasher", "appliance"),
    ("Microwave", "microwave", "appliance"),
    ("TV", "tv", "entertainment"),
    ("Parking", "car", "outside"),
    ("Garden", "tree", "outside"),
    ("Bike Storage", "bicycle", "outside"),
    ("Furnished", "chair", "furniture"),
    ("Study Desk", "desk", "furniture"),
    ("CCTV", "camera", "security"),
    ("En-suite", "bathroom", "bathroom"),
    ("Shared Bathroom", "shower", "bathroom"),
]


def run(conn: sa.Connection, ctx: SeedContext) -> SeedResult:
    result = SeedResult(name=NAME)
    # Cascades to property_features.
    result.deleted = conn.execute(sa.delete(schema.features)).rowcount
    conn.execute(
        sa.insert(schema.features),
        [{"name": name, "icon": icon, "category": category} for name, icon, category in FEATURES],
    )
    result.inserted = len(FEATURES)
    return result
