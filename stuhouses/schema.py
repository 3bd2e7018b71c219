"""
Canonical table layout shared by the seeds, the activity log and the payment rules.

Alembic revisions under `stuhouses/migrations` are the source of truth for DDL; this module
mirrors the head revision so application code can build Core statements without reflection.
"""

from __future__ import annotations

from enum import Enum

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


class UserRole(str, Enum):
    USER = "user"
    AGENT = "agent"
    ADMIN = "admin"


class PropertyStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    BOOKED = "booked"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


class BookingStatus(str, Enum):
    PENDING_PAYMENT = "pending_payment"
    DEPOSIT_PAID = "deposit_paid"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class RefundStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in local runs and tests).
JSONDocument = sa.JSON().with_variant(JSONB(), "postgresql")


def _in(column: str, values: type[Enum] | tuple[str, ...]) -> str:
    members = [v.value for v in values] if isinstance(values, type) else list(values)
    return f"{column} IN ({', '.join(repr(m) for m in members)})"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    ]


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP"))


metadata = sa.MetaData()


cities = sa.Table(
    "cities",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("name", sa.String(255), nullable=False),
    sa.Column("slug", sa.String(255), nullable=False, unique=True),
    sa.Column("description", sa.Text(), nullable=True),
    sa.Column("image_url", sa.String(512), nullable=True),
    sa.Column("property_count", sa.Integer(), nullable=False, server_default="0"),
    *_timestamps(),
)

universities = sa.Table(
    "universities",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("name", sa.String(255), nullable=False),
    sa.Column("slug", sa.String(255), nullable=False, unique=True),
    sa.Column("description", sa.Text(), nullable=True),
    sa.Column("image_url", sa.String(512), nullable=True),
    sa.Column("city_id", sa.Integer(), sa.ForeignKey("cities.id", ondelete="SET NULL"), nullable=True, index=True),
    sa.Column("address", sa.String(255), nullable=True),
    sa.Column("postcode", sa.String(16), nullable=True),
    sa.Column("latitude", sa.Float(), nullable=True),
    sa.Column("longitude", sa.Float(), nullable=True),
    sa.Column("student_count", sa.Integer(), nullable=True),
    sa.Column("website_url", sa.String(512), nullable=True),
    *_timestamps(),
)

features = sa.Table(
    "features",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("name", sa.String(255), nullable=False, unique=True),
    sa.Column("icon", sa.String(64), nullable=True),
    sa.Column("category", sa.String(64), nullable=True),
    *_timestamps(),
)

users = sa.Table(
    "users",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("email", sa.String(255), nullable=False, unique=True),
    sa.Column("password", sa.String(255), nullable=False),
    sa.Column("first_name", sa.String(255), nullable=True),
    sa.Column("last_name", sa.String(255), nullable=True),
    sa.Column("phone", sa.String(32), nullable=True),
    sa.Column("role", sa.String(16), nullable=False, server_default=UserRole.USER.value, index=True),
    sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
    sa.Column("verification_token", sa.String(255), nullable=True),
    sa.Column("reset_token", sa.String(255), nullable=True),
    sa.Column("reset_token_expires_at", sa.DateTime(timezone=True), nullable=True),
    *_timestamps(),
    sa.CheckConstraint(_in("role", UserRole), name="ck_users_role"),
)

properties = sa.Table(
    "properties",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("title", sa.String(255), nullable=False),
    sa.Column("slug", sa.String(255), nullable=False, unique=True),
    sa.Column("description", sa.Text(), nullable=True),
    sa.Column("city_id", sa.Integer(), sa.ForeignKey("cities.id", ondelete="SET NULL"), nullable=True, index=True),
    sa.Column(
        "nearest_university_id",
        sa.Integer(),
        sa.ForeignKey("universities.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    ),
    sa.Column("agent_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True),
    sa.Column("address_line_1", sa.String(255), nullable=False),
    sa.Column("address_line_2", sa.String(255), nullable=True),
    sa.Column("postcode", sa.String(16), nullable=False),
    sa.Column("latitude", sa.Float(), nullable=True),
    sa.Column("longitude", sa.Float(), nullable=True),
    sa.Column("bedrooms", sa.Integer(), nullable=False),
    sa.Column("bathrooms", sa.Integer(), nullable=False),
    sa.Column("price_per_person_per_week", sa.Numeric(10, 2), nullable=False),
    sa.Column("bills_included", sa.Boolean(), nullable=False, server_default=sa.false()),
    sa.Column("available_from", sa.Date(), nullable=True),
    sa.Column("property_type", sa.String(64), nullable=True),
    sa.Column("status", sa.String(16), nullable=False, server_default=PropertyStatus.ACTIVE.value, index=True),
    sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false(), index=True),
    sa.Column("views_count", sa.Integer(), nullable=False, server_default="0"),
    *_timestamps(),
    sa.CheckConstraint(_in("status", PropertyStatus), name="ck_properties_status"),
)

property_images = sa.Table(
    "property_images",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column(
        "property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    ),
    sa.Column("url", sa.String(512), nullable=False),
    sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
    sa.Column("description", sa.String(255), nullable=True),
    sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
    *_timestamps(),
)

property_features = sa.Table(
    "property_features",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column(
        "property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    ),
    sa.Column("feature_id", sa.Integer(), sa.ForeignKey("features.id", ondelete="CASCADE"), nullable=False, index=True),
    _created_at(),
    sa.UniqueConstraint("property_id", "feature_id", name="uq_property_features_property_feature"),
)

property_availability = sa.Table(
    "property_availability",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column(
        "property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    ),
    sa.Column("start_date", sa.Date(), nullable=False),
    sa.Column("end_date", sa.Date(), nullable=False),
    sa.Column("status", sa.String(16), nullable=False, server_default=AvailabilityStatus.AVAILABLE.value),
    *_timestamps(),
    sa.CheckConstraint(_in("status", AvailabilityStatus), name="ck_property_availability_status"),
    sa.CheckConstraint("end_date >= start_date", name="ck_property_availability_range"),
)

property_inquiries = sa.Table(
    "property_inquiries",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column(
        "property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    ),
    sa.Column("name", sa.String(255), nullable=False),
    sa.Column("email", sa.String(255), nullable=False),
    sa.Column("phone", sa.String(32), nullable=True),
    sa.Column("message", sa.Text(), nullable=False),
    sa.Column("move_in_date", sa.Date(), nullable=True),
    sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
    *_timestamps(),
)

user_shortlist = sa.Table(
    "user_shortlist",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    sa.Column(
        "property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    ),
    _created_at(),
    sa.UniqueConstraint("user_id", "property_id", name="uq_user_shortlist_user_property"),
)

activity_logs = sa.Table(
    "activity_logs",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True),
    sa.Column("action", sa.String(64), nullable=False),
    sa.Column("resource_type", sa.String(64), nullable=False, index=True),
    sa.Column("resource_id", sa.Integer(), nullable=True, index=True),
    sa.Column("details", JSONDocument, nullable=True),
    sa.Column("ip_address", sa.String(64), nullable=True),
    sa.Column("user_agent", sa.String(512), nullable=True),
    sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
        index=True,
    ),
)

payments = sa.Table(
    "payments",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    sa.Column(
        "property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    ),
    sa.Column("payment_type", sa.String(32), nullable=False),
    sa.Column("amount", sa.Numeric(10, 2), nullable=False),
    sa.Column("currency", sa.String(3), nullable=False, server_default="gbp"),
    sa.Column("stripe_payment_intent_id", sa.String(255), nullable=False),
    sa.Column("status", sa.String(32), nullable=False, server_default=PaymentStatus.PENDING.value),
    sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
    *_timestamps(),
    sa.CheckConstraint(_in("status", PaymentStatus), name="ck_payments_status"),
)

bookings = sa.Table(
    "bookings",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    sa.Column(
        "property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    ),
    sa.Column("start_date", sa.Date(), nullable=False),
    sa.Column("end_date", sa.Date(), nullable=False),
    sa.Column("number_of_tenants", sa.Integer(), nullable=False),
    sa.Column("status", sa.String(32), nullable=False, server_default=BookingStatus.PENDING_PAYMENT.value),
    sa.Column("deposit_amount", sa.Numeric(10, 2), nullable=False),
    sa.Column("rent_amount", sa.Numeric(10, 2), nullable=False),
    sa.Column("payment_frequency", sa.String(16), nullable=False, server_default="monthly"),
    sa.Column("special_requests", sa.Text(), nullable=True),
    *_timestamps(),
    sa.UniqueConstraint("user_id", "property_id", "start_date", name="uq_bookings_user_property_start"),
    sa.CheckConstraint(_in("status", BookingStatus), name="ck_bookings_status"),
    sa.CheckConstraint(_in("payment_frequency", ("monthly", "quarterly", "annually")), name="ck_bookings_frequency"),
    sa.CheckConstraint("number_of_tenants > 0", name="ck_bookings_tenants"),
)

rent_payments = sa.Table(
    "rent_payments",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column(
        "property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    ),
    sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    sa.Column("payment_id", sa.Integer(), sa.ForeignKey("payments.id", ondelete="SET NULL"), nullable=True, index=True),
    sa.Column("amount", sa.Numeric(10, 2), nullable=False),
    sa.Column("payment_date", sa.Date(), nullable=False),
    sa.Column("status", sa.String(16), nullable=False, server_default="paid"),
    _created_at(),
    sa.CheckConstraint(_in("status", ("paid", "overdue", "pending")), name="ck_rent_payments_status"),
)

refunds = sa.Table(
    "refunds",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("payment_id", sa.Integer(), sa.ForeignKey("payments.id", ondelete="CASCADE"), nullable=False, index=True),
    sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    sa.Column("amount", sa.Numeric(10, 2), nullable=False),
    sa.Column("reason", sa.Text(), nullable=True),
    sa.Column("stripe_refund_id", sa.String(255), nullable=False),
    sa.Column("status", sa.String(16), nullable=False),
    _created_at(),
    sa.CheckConstraint(_in("status", RefundStatus), name="ck_refunds_status"),
)

viewing_requests = sa.Table(
    "viewing_requests",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True),
    sa.Column(
        "property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    ),
    sa.Column("name", sa.String(255), nullable=False),
    sa.Column("email", sa.String(255), nullable=False),
    sa.Column("phone", sa.String(32), nullable=True),
    sa.Column("preferred_date", sa.Date(), nullable=False),
    sa.Column("preferred_time", sa.String(32), nullable=False),
    sa.Column("message", sa.Text(), nullable=True),
    sa.Column("status", sa.String(16), nullable=False, server_default="pending", index=True),
    *_timestamps(),
    sa.CheckConstraint(
        _in("status", ("pending", "confirmed", "completed", "cancelled")), name="ck_viewing_requests_status"
    ),
)

blog_posts = sa.Table(
    "blog_posts",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("title", sa.String(255), nullable=False),
    sa.Column("slug", sa.String(255), nullable=False, unique=True),
    sa.Column("excerpt", sa.Text(), nullable=True),
    sa.Column("content", sa.Text(), nullable=False),
    sa.Column("featured_image", sa.String(512), nullable=True),
    sa.Column("author_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True),
    sa.Column("status", sa.String(16), nullable=False, server_default="published", index=True),
    sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
    sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
    *_timestamps(),
    sa.CheckConstraint(_in("status", ("draft", "published")), name="ck_blog_posts_status"),
)

blog_categories = sa.Table(
    "blog_categories",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("name", sa.String(255), nullable=False),
    sa.Column("slug", sa.String(255), nullable=False, unique=True),
    sa.Column("description", sa.Text(), nullable=True),
    *_timestamps(),
)

blog_post_categories = sa.Table(
    "blog_post_categories",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("post_id", sa.Integer(), sa.ForeignKey("blog_posts.id", ondelete="CASCADE"), nullable=False, index=True),
    sa.Column(
        "category_id",
        sa.Integer(),
        sa.ForeignKey("blog_categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    sa.UniqueConstraint("post_id", "category_id", name="uq_blog_post_categories_post_category"),
)

settings = sa.Table(
    "settings",
    metadata,
    sa.Column("key", sa.String(128), primary_key=True),
    sa.Column("value", sa.Text(), nullable=True),
    sa.Column("type", sa.String(16), nullable=False, server_default="string"),
    sa.Column("description", sa.Text(), nullable=True),
    sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    sa.CheckConstraint(_in("type", ("string", "number", "boolean", "json")), name="ck_settings_type"),
)
