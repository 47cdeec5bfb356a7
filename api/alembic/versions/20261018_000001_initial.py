"""initial catalog schema

Revision ID: 20261018_000001
Revises: 
Create Date: 2026-10-18 00:00:01.000000
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261018_000001"
down_revision = None
branch_labels = None
depends_on = None


user_role_enum = postgresql.ENUM("admin", "moderator", "user", "guest", name="user_role", create_type=False)
user_theme_enum = postgresql.ENUM("light", "dark", name="user_theme", create_type=False)
user_language_enum = postgresql.ENUM("en", "fr", name="user_language", create_type=False)
media_kind_enum = postgresql.ENUM("movie", "series", name="media_kind", create_type=False)
notification_type_enum = postgresql.ENUM(
    "bluray_added", "bluray_removed", name="notification_type", create_type=False
)
ENUMS = (user_role_enum, user_theme_enum, user_language_enum, media_kind_enum, notification_type_enum)


def _jsonb_list() -> postgresql.JSONB:
    return postgresql.JSONB(astext_type=sa.Text())


def upgrade() -> None:
    """Create users, discs, tags, and notifications."""
    for enum in ENUMS:
        enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", user_role_enum, nullable=False, server_default="user"),
        sa.Column("theme", user_theme_enum, nullable=False, server_default="dark"),
        sa.Column("language", user_language_enum, nullable=False, server_default="en"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
        ),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "discs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("media_kind", media_kind_enum, nullable=False),
        sa.Column("release_year", sa.Integer(), nullable=True),
        sa.Column("director", sa.String(length=255), nullable=True),
        sa.Column("runtime_minutes", sa.Integer(), nullable=True),
        sa.Column("seasons", _jsonb_list(), nullable=True, server_default=sa.text("'[]'::jsonb")),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("description_fr", sa.Text(), nullable=True),
        sa.Column("genres", _jsonb_list(), nullable=True, server_default=sa.text("'[]'::jsonb")),
        sa.Column("genres_fr", _jsonb_list(), nullable=True, server_default=sa.text("'[]'::jsonb")),
        sa.Column("tags", _jsonb_list(), nullable=True, server_default=sa.text("'[]'::jsonb")),
        sa.Column("cover_image_url", sa.String(length=1024), nullable=True),
        sa.Column("backdrop_url", sa.String(length=1024), nullable=True),
        sa.Column("purchase_price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("purchase_date", sa.Date(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("rating", sa.Float(), nullable=False, server_default="0"),
        sa.Column("tmdb_id", sa.String(length=32), nullable=True),
        sa.Column("imdb_id", sa.String(length=32), nullable=True),
        sa.Column(
            "added_by",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_discs_title", "discs", ["title"], unique=False)
    op.create_index("ix_discs_tmdb_id", "discs", ["tmdb_id"], unique=False)
    op.create_index("ix_discs_created_at", "discs", ["created_at"], unique=False)

    op.create_table(
        "tags",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=64), nullable=False, unique=True),
        sa.Column("color", sa.String(length=16), nullable=True),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column(
            "created_by",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "notifications",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("notification_type", notification_type_enum, nullable=False),
        sa.Column("message", sa.String(length=500), nullable=False),
        sa.Column("disc_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"], unique=False)
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"], unique=False)


def downgrade() -> None:
    """Drop catalog tables and enum types."""
    op.drop_index("ix_notifications_created_at", table_name="notifications")
    op.drop_index("ix_notifications_user_id", table_name="notifications")
    op.drop_table("notifications")
    op.drop_table("tags")
    op.drop_index("ix_discs_created_at", table_name="discs")
    op.drop_index("ix_discs_tmdb_id", table_name="discs")
    op.drop_index("ix_discs_title", table_name="discs")
    op.drop_table("discs")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    for enum in reversed(ENUMS):
        enum.drop(op.get_bind(), checkfirst=True)
