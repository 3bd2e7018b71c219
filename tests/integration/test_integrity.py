from __future__ import annotations

from datetime import date

import pytest
import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError

from stuhouses import schema


def _scalar(engine, q):
    with engine.connect() as conn:
        return conn.execute(q).scalar()


def _city_id(conn: sa.Connection, slug: str) -> int:
    return conn.execute(sa.select(schema.cities.c.id).where(schema.cities.c.slug == slug)).scalar_one()


def _payment(conn: sa.Connection, **overrides) -> int:
    values = dict(
        user_id=2,
        property_id=1,
        payment_type="deposit",
        amount=500,
        stripe_payment_intent_id="pi_test",
    )
    values.update(overrides)
    return conn.execute(sa.insert(schema.payments).values(**values)).inserted_primary_key[0]


def test_deleting_a_city_keeps_its_properties_and_universities(seeded_engine) -> None:
    with seeded_engine.begin() as conn:
        leeds = _city_id(conn, "leeds")
        property_ids = conn.execute(
            sa.select(schema.properties.c.id).where(schema.properties.c.city_id == leeds)
        ).scalars().all()
        conn.execute(sa.delete(schema.cities).where(schema.cities.c.id == leeds))

    assert property_ids
    with seeded_engine.connect() as conn:
        cities = conn.execute(
            sa.select(schema.properties.c.city_id).where(schema.properties.c.id.in_(property_ids))
        ).scalars().all()
        university_city = conn.execute(
            sa.select(schema.universities.c.city_id).where(schema.universities.c.slug == "university-of-leeds")
        ).scalar_one()
    assert cities == [None] * len(property_ids)
    assert university_city is None


def test_deleting_a_property_removes_its_listing_details(seeded_engine) -> None:
    with seeded_engine.begin() as conn:
        conn.execute(sa.insert(schema.user_shortlist).values(user_id=2, property_id=1))
        conn.execute(sa.delete(schema.properties).where(schema.properties.c.id == 1))

    for table in (
        schema.property_images,
        schema.property_features,
        schema.property_availability,
        schema.user_shortlist,
    ):
        count = _scalar(
            seeded_engine, sa.select(sa.func.count()).select_from(table).where(table.c.property_id == 1)
        )
        assert count == 0, table.name


def test_shortlist_pair_is_unique(seeded_engine) -> None:
    with seeded_engine.begin() as conn:
        conn.execute(sa.insert(schema.user_shortlist).values(user_id=2, property_id=1))

    with pytest.raises(IntegrityError):
        with seeded_engine.begin() as conn:
            conn.execute(sa.insert(schema.user_shortlist).values(user_id=2, property_id=1))


def test_booking_unique_per_user_property_and_start(seeded_engine) -> None:
    booking = dict(
        user_id=2,
        property_id=1,
        start_date=date(2025, 9, 1),
        end_date=date(2026, 6, 30),
        number_of_tenants=1,
        deposit_amount=250,
        rent_amount=5000,
    )
    with seeded_engine.begin() as conn:
        conn.execute(sa.insert(schema.bookings).values(**booking))
        # Same pair, different start: allowed.
        conn.execute(sa.insert(schema.bookings).values(**{**booking, "start_date": date(2026, 9, 1)}))

    with pytest.raises(IntegrityError):
        with seeded_engine.begin() as conn:
            conn.execute(sa.insert(schema.bookings).values(**booking))


def test_booking_needs_at_least_one_tenant(seeded_engine) -> None:
    with pytest.raises(IntegrityError):
        with seeded_engine.begin() as conn:
            conn.execute(
                sa.insert(schema.bookings).values(
                    user_id=2,
                    property_id=1,
                    start_date=date(2025, 9, 1),
                    end_date=date(2026, 6, 30),
                    number_of_tenants=0,
                    deposit_amount=250,
                    rent_amount=5000,
                )
            )


def test_deleting_a_user_keeps_their_activity_anonymised(seeded_engine) -> None:
    from stuhouses import activity_log

    with seeded_engine.begin() as conn:
        user_id = conn.execute(
            sa.insert(schema.users).values(email="leaver@example.com", password="x")
        ).inserted_primary_key[0]
        log_id = activity_log.append(conn, action="create", resource_type="property", user_id=user_id, resource_id=1)
        conn.execute(sa.delete(schema.users).where(schema.users.c.id == user_id))

    row_user = _scalar(
        seeded_engine, sa.select(schema.activity_logs.c.user_id).where(schema.activity_logs.c.id == log_id)
    )
    assert row_user is None
    assert _scalar(seeded_engine, sa.select(sa.func.count()).select_from(schema.activity_logs)) == 1


def test_deleting_a_user_removes_their_shortlist(seeded_engine) -> None:
    with seeded_engine.begin() as conn:
        conn.execute(sa.insert(schema.user_shortlist).values(user_id=2, property_id=2))
        conn.execute(sa.delete(schema.users).where(schema.users.c.id == 2))

    assert _scalar(seeded_engine, sa.select(sa.func.count()).select_from(schema.user_shortlist)) == 0


def test_deleting_a_payment_keeps_rent_history(seeded_engine) -> None:
    with seeded_engine.begin() as conn:
        payment_id = _payment(conn)
        rent_id = conn.execute(
            sa.insert(schema.rent_payments).values(
                property_id=1, user_id=2, payment_id=payment_id, amount=500, payment_date=date(2025, 9, 1)
            )
        ).inserted_primary_key[0]
        conn.execute(sa.delete(schema.payments).where(schema.payments.c.id == payment_id))

    with seeded_engine.connect() as conn:
        row = conn.execute(sa.select(schema.rent_payments).where(schema.rent_payments.c.id == rent_id)).one()
    assert row.payment_id is None


def test_deleting_a_payment_removes_its_refunds(seeded_engine) -> None:
    with seeded_engine.begin() as conn:
        payment_id = _payment(conn, status="completed")
        conn.execute(
            sa.insert(schema.refunds).values(
                payment_id=payment_id, created_by=1, amount=10, stripe_refund_id="re_1", status="succeeded"
            )
        )
        conn.execute(sa.delete(schema.payments).where(schema.payments.c.id == payment_id))

    assert _scalar(seeded_engine, sa.select(sa.func.count()).select_from(schema.refunds)) == 0


def test_user_email_is_unique(seeded_engine) -> None:
    with pytest.raises(IntegrityError):
        with seeded_engine.begin() as conn:
            conn.execute(sa.insert(schema.users).values(email="user@example.com", password="x"))


@pytest.mark.parametrize(
    "table,values",
    [
        (schema.users, {"email": "bad-role@example.com", "password": "x", "role": "superuser"}),
        (schema.properties, {
            "title": "Bad",
            "slug": "bad-status",
            "address_line_1": "1 Street",
            "postcode": "LS1 1AA",
            "bedrooms": 1,
            "bathrooms": 1,
            "price_per_person_per_week": 100,
            "status": "archived",
        }),
    ],
)
def test_enumerated_columns_reject_unknown_values(seeded_engine, table: sa.Table, values: dict) -> None:
    with pytest.raises(IntegrityError):
        with seeded_engine.begin() as conn:
            conn.execute(sa.insert(table).values(**values))


def test_availability_window_cannot_end_before_it_starts(seeded_engine) -> None:
    with pytest.raises(IntegrityError):
        with seeded_engine.begin() as conn:
            conn.execute(
                sa.insert(schema.property_availability).values(
                    property_id=1, start_date=date(2025, 9, 1), end_date=date(2025, 8, 1)
                )
            )


def test_feature_names_are_unique(seeded_engine) -> None:
    with pytest.raises(IntegrityError):
        with seeded_engine.begin() as conn:
            conn.execute(sa.insert(schema.features).values(name="WiFi"))


def test_property_slug_is_unique(seeded_engine) -> None:
    with pytest.raises(IntegrityError):
        with seeded_engine.begin() as conn:
            conn.execute(
                sa.insert(schema.properties).values(
                    title="Copy",
                    slug="faraday-road",
                    address_line_1="1 Street",
                    postcode="LS1 1AA",
                    bedrooms=1,
                    bathrooms=1,
                    price_per_person_per_week=100,
                )
            )
