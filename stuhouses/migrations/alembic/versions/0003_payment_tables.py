"""payment tables

Revision ID: 0003_payment_tables
Revises: 0002_activity_logs
Create Date: 2025-04-06
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0003_payment_tables"
down_revision = "0002_activity_logs"
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    ]


def upgrade() -> None:
    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("payment_type", sa.String(32), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="gbp"),
        sa.Column("stripe_payment_intent_id", sa.String(255), nullable=False),
        # Transitions are enforced by stuhouses.payments, not by the schema.
        sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('pending', 'completed', 'failed', 'refunded', 'partially_refunded')",
            name="ck_payments_status",
        ),
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("number_of_tenants", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending_payment"),
        sa.Column("deposit_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("rent_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("payment_frequency", sa.String(16), nullable=False, server_default="monthly"),
        sa.Column("special_requests", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "property_id", "start_date", name="uq_bookings_user_property_start"),
        sa.CheckConstraint(
            "status IN ('pending_payment', 'deposit_paid', 'confirmed', 'cancelled', 'completed')",
            name="ck_bookings_status",
        ),
        sa.CheckConstraint(
            "payment_frequency IN ('monthly', 'quarterly', 'annually')",
            name="ck_bookings_frequency",
        ),
        sa.CheckConstraint("number_of_tenants > 0", name="ck_bookings_tenants"),
    )

    op.create_table(
        "rent_payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        # Rent history survives deletion of the originating payment.
        sa.Column("payment_id", sa.Integer(), sa.ForeignKey("payments.id", ondelete="SET NULL"), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="paid"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.CheckConstraint("status IN ('paid', 'overdue', 'pending')", name="ck_rent_payments_status"),
    )

    op.create_table(
        "refunds",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("payment_id", sa.Integer(), sa.ForeignKey("payments.id", ondelete="CASCADE"), nullable=False),
        # Admin who issued the refund.
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("stripe_refund_id", sa.String(255), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.CheckConstraint("status IN ('pending', 'succeeded', 'failed')", name="ck_refunds_status"),
    )

    op.create_index("ix_payments_user_id", "payments", ["user_id"])
    op.create_index("ix_payments_property_id", "payments", ["property_id"])
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_property_id", "bookings", ["property_id"])
    op.create_index("ix_rent_payments_property_id", "rent_payments", ["property_id"])
    op.create_index("ix_rent_payments_user_id", "rent_payments", ["user_id"])
    op.create_index("ix_rent_payments_payment_id", "rent_payments", ["payment_id"])
    op.create_index("ix_refunds_payment_id", "refunds", ["payment_id"])
    op.create_index("ix_refunds_created_by", "refunds", ["created_by"])


def downgrade() -> None:
    op.drop_index("ix_refunds_created_by", table_name="refunds")
    op.drop_index("ix_refunds_payment_id", table_name="refunds")
    op.drop_index("ix_rent_payments_payment_id", table_name="rent_payments")
    op.drop_index("ix_rent_payments_user_id", table_name="rent_payments")
    op.drop_index("ix_rent_payments_property_id", table_name="rent_payments")
    op.drop_index("ix_bookings_property_id", table_name="bookings")
    op.drop_index("ix_bookings_user_id", table_name="bookings")
    op.drop_index("ix_payments_property_id", table_name="payments")
    op.drop_index("ix_payments_user_id", table_name="payments")

    op.drop_table("refunds")
    op.drop_table("rent_payments")
    op.drop_table("bookings")
    op.drop_table("payments")
