"""viewing requests, blog and site settings

Revision ID: 0004_viewing_requests_and_blog
Revises: 0003_payment_tables
Create Date: 2025-04-12
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0004_viewing_requests_and_blog"
down_revision = "0003_payment_tables"
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    ]


def upgrade() -> None:
    op.create_table(
        "viewing_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("preferred_date", sa.Date(), nullable=False),
        sa.Column("preferred_time", sa.String(32), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'completed', 'cancelled')",
            name="ck_viewing_requests_status",
        ),
    )

    op.create_table(
        "blog_posts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("featured_image", sa.String(512), nullable=True),
        sa.Column("author_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="published"),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("status IN ('draft', 'published')", name="ck_blog_posts_status"),
    )

    op.create_table(
        "blog_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "blog_post_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("post_id", sa.Integer(), sa.ForeignKey("blog_posts.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("blog_categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.UniqueConstraint("post_id", "category_id", name="uq_blog_post_categories_post_category"),
    )

    op.create_table(
        "settings",
        sa.Column("key", sa.String(128), primary_key=True),
        sa.Column("value", sa.Text(), nullable=True),
        sa.Column("type", sa.String(16), nullable=False, server_default="string"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.CheckConstraint("type IN ('string', 'number', 'boolean', 'json')", name="ck_settings_type"),
    )

    op.create_index("ix_viewing_requests_user_id", "viewing_requests", ["user_id"])
    op.create_index("ix_viewing_requests_property_id", "viewing_requests", ["property_id"])
    op.create_index("ix_viewing_requests_status", "viewing_requests", ["status"])
    op.create_index("ix_blog_posts_author_id", "blog_posts", ["author_id"])
    op.create_index("ix_blog_posts_status", "blog_posts", ["status"])
    op.create_index("ix_blog_post_categories_post_id", "blog_post_categories", ["post_id"])
    op.create_index("ix_blog_post_categories_category_id", "blog_post_categories", ["category_id"])


def downgrade() -> None:
    op.drop_index("ix_blog_post_categories_category_id", table_name="blog_post_categories")
    op.drop_index("ix_blog_post_categories_post_id", table_name="blog_post_categories")
    op.drop_index("ix_blog_posts_status", table_name="blog_posts")
    op.drop_index("ix_blog_posts_author_id", table_name="blog_posts")
    op.drop_index("ix_viewing_requests_status", table_name="viewing_requests")
    op.drop_index("ix_viewing_requests_property_id", table_name="viewing_requests")
    op.drop_index("ix_viewing_requests_user_id", table_name="viewing_requests")

    op.drop_table("settings")
    op.drop_table("blog_post_categories")
    op.drop_table("blog_categories")
    op.drop_table("blog_posts")
    op.drop_table("viewing_requests")
