"""Initial schema and admin seed for the LANMIC site backend

Revision ID: 20260101_000000
Revises: None
Create Date: 2026-01-01 00:00:00.000000

Creates the user, refresh token and content tables, and seeds the default
dashboard administrator (admin@gmail.com / admin@pass) as a verified,
fully registered user. Change that password after the first login.

Revision format: YYYYMMDD_HHMMSS_description

"""

from datetime import datetime, timezone
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op
from lanmic_site.server.services.security import hash_password

# revision identifiers, used by Alembic.
revision: str = "20260101_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ADMIN_EMAIL = "admin@gmail.com"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin@pass"


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _owner_column() -> sa.Column:
    return sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)


def upgrade() -> None:
    """Create all tables and seed the administrator."""

    # Create users table
    users = op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(50), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("otp", sa.String(10), nullable=True),
        sa.Column("otp_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reset_otp_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("pending_email", sa.String(255), nullable=True),
        sa.Column("email_change_otp", sa.String(10), nullable=True),
        sa.Column("email_change_otp_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("email_change_current_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("email_change_new_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    # Create refresh_tokens table
    op.create_table(
        "refresh_tokens",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("token", sa.String(128), nullable=False),
        _owner_column(),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_revoked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_refresh_tokens_token", "refresh_tokens", ["token"], unique=True)
    op.create_index("ix_refresh_tokens_user_id", "refresh_tokens", ["user_id"])

    # Create blog_posts table
    op.create_table(
        "blog_posts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("read_time", sa.String(50), nullable=True),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.Column("author_position", sa.String(255), nullable=True),
        sa.Column("author_image", sa.String(500), nullable=True),
        sa.Column("blog_image", sa.String(500), nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.false()),
        _owner_column(),
        *_timestamps(),
    )
    op.create_index("ix_blog_posts_published", "blog_posts", ["published"])
    op.create_index("ix_blog_posts_user_id", "blog_posts", ["user_id"])

    # Create team_members table
    op.create_table(
        "team_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("position", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("department", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        _owner_column(),
        *_timestamps(),
    )
    op.create_index("ix_team_members_is_active", "team_members", ["is_active"])
    op.create_index("ix_team_members_user_id", "team_members", ["user_id"])

    # Create executive_leadership table
    op.create_table(
        "executive_leadership",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("position", sa.String(200), nullable=False),
        sa.Column("description", sa.String(1000), nullable=False),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("linkedin_url", sa.String(500), nullable=True),
        sa.Column("twitter_url", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        _owner_column(),
        *_timestamps(),
    )
    op.create_index("ix_executive_leadership_is_active", "executive_leadership", ["is_active"])
    op.create_index("ix_executive_leadership_user_id", "executive_leadership", ["user_id"])

    # Create testimonials table
    op.create_table(
        "testimonials",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("position", sa.String(255), nullable=True),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("content", sa.String(2000), nullable=False),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        _owner_column(),
        *_timestamps(),
    )
    op.create_index("ix_testimonials_is_active", "testimonials", ["is_active"])
    op.create_index("ix_testimonials_user_id", "testimonials", ["user_id"])

    # Seed default administrator
    now = datetime.now(timezone.utc)
    op.bulk_insert(
        users,
        [
            {
                "email": ADMIN_EMAIL,
                "username": ADMIN_USERNAME,
                "password_hash": hash_password(ADMIN_PASSWORD),
                "is_verified": True,
                "reset_otp_verified": False,
                "email_change_current_verified": False,
                "email_change_new_verified": False,
                "created_at": now,
                "updated_at": now,
            }
        ],
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("testimonials")
    op.drop_table("executive_leadership")
    op.drop_table("team_members")
    op.drop_table("blog_posts")
    op.drop_table("refresh_tokens")
    op.drop_table("users")
