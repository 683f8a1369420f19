"""initial schema: users, campsites and favorite lists

Revision ID: 5f2c9a1d7e43
Revises:
Create Date: 2026-03-14 09:12:00.000000
"""

from __future__ import annotations

from typing import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "5f2c9a1d7e43"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            server_onupdate=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    op.create_table(
        "campsites",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=2048), nullable=False),
        sa.Column("image", sa.String(length=512), nullable=True),
        sa.Column("elevation", sa.Integer(), nullable=True),
        sa.Column("cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("name", name="uq_campsites_name"),
    )

    op.create_table(
        "favorites",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("owner_id", sa.String(length=24), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("owner_id", name="uq_favorites_owner_id"),
    )

    op.create_table(
        "favorite_campsites",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("favorite_id", sa.String(length=24), nullable=False),
        sa.Column("campsite_id", sa.String(length=24), nullable=False),
        sa.Column(
            "added_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["favorite_id"], ["favorites.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "favorite_id",
            "campsite_id",
            name="uq_favorite_campsites_favorite_campsite",
        ),
    )
    op.create_index(
        "ix_favorite_campsites_favorite_id",
        "favorite_campsites",
        ["favorite_id"],
    )
    op.create_index(
        "ix_favorite_campsites_campsite_id",
        "favorite_campsites",
        ["campsite_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_favorite_campsites_campsite_id", table_name="favorite_campsites")
    op.drop_index("ix_favorite_campsites_favorite_id", table_name="favorite_campsites")
    op.drop_table("favorite_campsites")
    op.drop_table("favorites")
    op.drop_table("campsites")
    op.drop_table("users")
