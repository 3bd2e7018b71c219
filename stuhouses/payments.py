"""
Payment status rules.

The schema only constrains `payments.status` to known values and ties refunds to payments by
foreign key. Which transitions are legal, and what a refund does to its payment, is decided here.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import sqlalchemy as sa

from stuhouses import schema
from stuhouses.logging import logger
from stuhouses.schema import PaymentStatus, RefundStatus


TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.COMPLETED, PaymentStatus.FAILED}),
    PaymentStatus.COMPLETED: frozenset({PaymentStatus.REFUNDED, PaymentStatus.PARTIALLY_REFUNDED}),
    PaymentStatus.PARTIALLY_REFUNDED: frozenset({PaymentStatus.REFUNDED, PaymentStatus.PARTIALLY_REFUNDED}),
    PaymentStatus.FAILED: frozenset(),
    PaymentStatus.REFUNDED: frozenset(),
}

REFUNDABLE = frozenset({PaymentStatus.COMPLETED, PaymentStatus.PARTIALLY_REFUNDED})


class PaymentNotFound(LookupError):
    pass


class InvalidPaymentTransition(ValueError):
    pass


class RefundError(ValueError):
    pass


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _load_for_update(conn: sa.Connection, payment_id: int) -> sa.RowMapping:
    q = (
        sa.select(schema.payments.c.id, schema.payments.c.status, schema.payments.c.amount)
        .where(schema.payments.c.id == payment_id)
        .with_for_update()
    )
    row = conn.execute(q).mappings().first()
    if row is None:
        raise PaymentNotFound(f"payment {payment_id} not found")
    return row


def can_transition(current: PaymentStatus, new: PaymentStatus) -> bool:
    return new in TRANSITIONS[current]


def transition_payment(conn: sa.Connection, payment_id: int, new_status: PaymentStatus | str) -> PaymentStatus:
    new = PaymentStatus(new_status)
    row = _load_for_update(conn, payment_id)
    current = PaymentStatus(row["status"])
    if not can_transition(current, new):
        raise InvalidPaymentTransition(f"payment {payment_id}: {current.value} -> {new.value} is not allowed")

    values: dict = {"status": new.value, "updated_at": _now()}
    if new is PaymentStatus.COMPLETED:
        values["completed_at"] = _now()
    conn.execute(sa.update(schema.payments).where(schema.payments.c.id == payment_id).values(**values))
    logger.info("payment_status_changed", payment_id=payment_id, from_status=current.value, to_status=new.value)
    return new


def refunded_total(conn: sa.Connection, payment_id: int) -> Decimal:
    q = sa.select(sa.func.coalesce(sa.func.sum(schema.refunds.c.amount), 0)).where(
        schema.refunds.c.payment_id == payment_id,
        schema.refunds.c.status == RefundStatus.SUCCEEDED.value,
    )
    return Decimal(str(conn.execute(q).scalar_one()))


def record_refund(
    conn: sa.Connection,
    *,
    payment_id: int,
    created_by: int,
    amount: Decimal | str | int,
    stripe_refund_id: str,
    reason: str | None = None,
    status: RefundStatus | str = RefundStatus.SUCCEEDED,
) -> int:
    """
    Insert a refund row and, once the gateway reports success, move the payment to
    `refunded` (nothing left to refund) or `partially_refunded`.

    Pending and failed refunds are recorded without touching the payment.
    """
    refund_status = RefundStatus(status)
    amount = Decimal(str(amount))
    if amount <= 0:
        raise RefundError("refund amount must be positive")

    payment = _load_for_update(conn, payment_id)
    current = PaymentStatus(payment["status"])
    if current not in REFUNDABLE:
        raise RefundError(f"payment {payment_id} is {current.value}; only completed payments can be refunded")

    already = refunded_total(conn, payment_id)
    remaining = Decimal(str(payment["amount"])) - already
    if amount > remaining:
        raise RefundError(f"refund {amount} exceeds remaining {remaining} on payment {payment_id}")

    refund_id = conn.execute(
        sa.insert(schema.refunds).values(
            payment_id=payment_id,
            created_by=created_by,
            amount=amount,
            reason=reason,
            stripe_refund_id=stripe_refund_id,
            status=refund_status.value,
        )
    ).inserted_primary_key[0]

    if refund_status is RefundStatus.SUCCEEDED:
        new = PaymentStatus.REFUNDED if amount == remaining else PaymentStatus.PARTIALLY_REFUNDED
        transition_payment(conn, payment_id, new)
    return refund_id
