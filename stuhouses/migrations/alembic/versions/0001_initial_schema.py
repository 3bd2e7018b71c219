"""initial schema

Revision ID: 0001_initial_schema
Revises: None
Create Date: 2023-04-01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    ]


def upgrade() -> None:
    op.create_table(
        "cities",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(512), nullable=True),
        sa.Column("property_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "universities",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(512), nullable=True),
        sa.Column("city_id", sa.Integer(), sa.ForeignKey("cities.id", ondelete="SET NULL"), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("postcode", sa.String(16), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("student_count", sa.Integer(), nullable=True),
        sa.Column("website_url", sa.String(512), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "features",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("icon", sa.String(64), nullable=True),
        sa.Column("category", sa.String(64), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("role", sa.String(16), nullable=False, server_default="user"),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verification_token", sa.String(255), nullable=True),
        sa.Column("reset_token", sa.String(255), nullable=True),
        sa.Column("reset_token_expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("role IN ('user', 'agent', 'admin')", name="ck_users_role"),
    )

    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        # Properties outlive their city, university and agent.
        sa.Column("city_id", sa.Integer(), sa.ForeignKey("cities.id", ondelete="SET NULL"), nullable=True),
        sa.Column(
            "nearest_university_id",
            sa.Integer(),
            sa.ForeignKey("universities.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("agent_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
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
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("views_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.CheckConstraint("status IN ('active', 'inactive', 'draft')", name="ck_properties_status"),
    )

    op.create_table(
        "property_images",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("url", sa.String(512), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "property_features",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("feature_id", sa.Integer(), sa.ForeignKey("features.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.UniqueConstraint("property_id", "feature_id", name="uq_property_features_property_feature"),
    )

    op.create_table(
        "property_availability",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="available"),
        *_timestamps(),
        sa.CheckConstraint("status IN ('available', 'reserved', 'booked')", name="ck_property_availability_status"),
        sa.CheckConstraint("end_date >= start_date", name="ck_property_availability_range"),
    )

    op.create_table(
        "property_inquiries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("move_in_date", sa.Date(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    op.create_table(
        "user_shortlist",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.UniqueConstraint("user_id", "property_id", name="uq_user_shortlist_user_property"),
    )

    op.create_index("ix_universities_city_id", "universities", ["city_id"])
    op.create_index("ix_users_role", "users", ["role"])

    op.create_index("ix_properties_city_id", "properties", ["city_id"])
    op.create_index("ix_properties_nearest_university_id", "properties", ["nearest_university_id"])
    op.create_index("ix_properties_agent_id", "properties", ["agent_id"])
    op.create_index("ix_properties_status", "properties", ["status"])
    op.create_index("ix_properties_is_featured", "properties", ["is_featured"])

    op.create_index("ix_property_images_property_id", "property_images", ["property_id"])
    op.create_index("ix_property_features_property_id", "property_features", ["property_id"])
    op.create_index("ix_property_features_feature_id", "property_features", ["feature_id"])
    op.create_index("ix_property_availability_property_id", "property_availability", ["property_id"])
    op.create_index("ix_property_inquiries_property_id", "property_inquiries", ["property_id"])
    op.create_index("ix_user_shortlist_user_id", "user_shortlist", ["user_id"])
    op.create_index("ix_user_shortlist_property_id", "user_shortlist", ["property_id"])


def downgrade() -> None:
    op.drop_index("ix_user_shortlist_property_id", table_name="user_shortlist")
    op.drop_index("ix_user_shortlist_user_id", table_name="user_shortlist")
    op.drop_index("ix_property_inquiries_property_id", table_name="property_inquiries")
    op.drop_index("ix_property_availability_property_id", table_name="property_availability")
    op.drop_index("ix_property_features_feature_id", table_name="property_features")
    op.drop_index("ix_property_features_property_id", table_name="property_features")
    op.drop_index("ix_property_images_property_id", table_name="property_images")

    op.drop_index("ix_properties_is_featured", table_name="properties")
    op.drop_index("ix_properties_status", table_name="properties")
    op.drop_index("ix_properties_agent_id", table_name="properties")
    op.drop_index("ix_properties_nearest_university_id", table_name="properties")
    op.drop_index("ix_properties_city_id", table_name="properties")

    op.drop_index("ix_users_role", table_name="users")
    op.drop_index("ix_universities_city_id", table_name="universities")

    # Children before parents.
    op.drop_table("user_shortlist")
    op.drop_table("property_inquiries")
    op.drop_table("property_availability")
    op.drop_table("property_features")
    op.drop_table("property_images")
    op.drop_table("properties")
    op.drop_table("users")
    op.drop_table("features")
    op.drop_table("universities")
    op.drop_table("cities")
