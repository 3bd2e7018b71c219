from __future__ import annotations

from decimal import Decimal

import pytest
import sqlalchemy as sa

from stuhouses import payments, schema
from stuhouses.schema import PaymentStatus


def _new_payment(engine, amount: int = 100, status: str = "pending") -> int:
    with engine.begin() as conn:
        return conn.execute(
            sa.insert(schema.payments).values(
                user_id=2,
                property_id=1,
                payment_type="deposit",
                amount=amount,
                stripe_payment_intent_id="pi_123",
                status=status,
            )
        ).inserted_primary_key[0]


def _status(engine, payment_id: int) -> str:
    with engine.connect() as conn:
        return conn.execute(
            sa.select(schema.payments.c.status).where(schema.payments.c.id == payment_id)
        ).scalar_one()


def test_schema_alone_does_not_move_payment_status(seeded_engine) -> None:
    payment_id = _new_payment(seeded_engine)
    with seeded_engine.begin() as conn:
        conn.execute(
            sa.insert(schema.refunds).values(
                payment_id=payment_id, created_by=1, amount=100, stripe_refund_id="re_raw", status="succeeded"
            )
        )
    assert _status(seeded_engine, payment_id) == "pending"


def test_completing_a_payment_stamps_completed_at(seeded_engine) -> None:
    payment_id = _new_payment(seeded_engine)
    with seeded_engine.begin() as conn:
        assert payments.transition_payment(conn, payment_id, "completed") is PaymentStatus.COMPLETED

    with seeded_engine.connect() as conn:
        row = conn.execute(sa.select(schema.payments).where(schema.payments.c.id == payment_id)).one()
    assert row.status == "completed"
    assert row.completed_at is not None


@pytest.mark.parametrize(
    "start,target",
    [
        ("pending", "refunded"),
        ("failed", "completed"),
        ("refunded", "pending"),
        ("completed", "pending"),
    ],
)
def test_illegal_transitions_are_rejected(seeded_engine, start: str, target: str) -> None:
    payment_id = _new_payment(seeded_engine, status=start)
    with pytest.raises(payments.InvalidPaymentTransition):
        with seeded_engine.begin() as conn:
            payments.transition_payment(conn, payment_id, target)
    assert _status(seeded_engine, payment_id) == start


def test_transition_on_missing_payment(seeded_engine) -> None:
    with pytest.raises(payments.PaymentNotFound):
        with seeded_engine.begin() as conn:
            payments.transition_payment(conn, 9999, "completed")


def test_partial_then_full_refund(seeded_engine) -> None:
    payment_id = _new_payment(seeded_engine, status="completed")

    with seeded_engine.begin() as conn:
        payments.record_refund(conn, payment_id=payment_id, created_by=1, amount="40", stripe_refund_id="re_1")
    assert _status(seeded_engine, payment_id) == "partially_refunded"

    with seeded_engine.begin() as conn:
        payments.record_refund(conn, payment_id=payment_id, created_by=1, amount=60, stripe_refund_id="re_2")
        assert payments.refunded_total(conn, payment_id) == Decimal("100")
    assert _status(seeded_engine, payment_id) == "refunded"


def test_pending_refund_leaves_payment_alone(seeded_engine) -> None:
    payment_id = _new_payment(seeded_engine, status="completed")
    with seeded_engine.begin() as conn:
        payments.record_refund(
            conn, payment_id=payment_id, created_by=1, amount=100, stripe_refund_id="re_p", status="pending"
        )
        assert payments.refunded_total(conn, payment_id) == Decimal("0")
    assert _status(seeded_engine, payment_id) == "completed"


def test_refund_requires_completed_payment(seeded_engine) -> None:
    payment_id = _new_payment(seeded_engine)
    with pytest.raises(payments.RefundError):
        with seeded_engine.begin() as conn:
            payments.record_refund(conn, payment_id=payment_id, created_by=1, amount=10, stripe_refund_id="re_x")


def test_refund_cannot_exceed_remaining(seeded_engine) -> None:
    payment_id = _new_payment(seeded_engine, status="completed")
    with seeded_engine.begin() as conn:
        payments.record_refund(conn, payment_id=payment_id, created_by=1, amount=70, stripe_refund_id="re_1")

    with pytest.raises(payments.RefundError, match="exceeds remaining"):
        with seeded_engine.begin() as conn:
            payments.record_refund(conn, payment_id=payment_id, created_by=1, amount=31, stripe_refund_id="re_2")

    with seeded_engine.connect() as conn:
        count = conn.execute(
            sa.select(sa.func.count()).select_from(schema.refunds).where(schema.refunds.c.payment_id == payment_id)
        ).scalar_one()
    assert count == 1
