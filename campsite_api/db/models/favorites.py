"""SQLAlchemy ORM models for per-user favorite campsite lists.

Each user owns at most one :class:`Favorite` row; the campsites in the list
live in :class:`FavoriteCampsite` association rows.  Both invariants (one list
per owner, one row per campsite within a list) are unique constraints so the
repository can rely on ``ON CONFLICT DO NOTHING`` inserts instead of
read-then-create sequences.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campsite_api.utils.identifiers import OBJECT_ID_LENGTH, new_object_id

from . import Base, Campsite, User, utcnow


class Favorite(Base):
    """The favorite list owned by a single user."""

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("owner_id", name="uq_favorites_owner_id"),
    )

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=new_object_id
    )
    owner_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        doc="Identifier of the owning user. Unique: a user has zero or one list.",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    owner: Mapped[User] = relationship("User")
    entries: Mapped[list["FavoriteCampsite"]] = relationship(
        "FavoriteCampsite",
        back_populates="favorite",
        cascade="all, delete-orphan",
        order_by="FavoriteCampsite.id",
    )

    @property
    def campsite_ids(self) -> list[str]:
        """Campsite identifiers in insertion order."""
        return [entry.campsite_id for entry in self.entries]


class FavoriteCampsite(Base):
    """Membership row linking a campsite identifier to a favorite list."""

    __tablename__ = "favorite_campsites"
    __table_args__ = (
        UniqueConstraint(
            "favorite_id",
            "campsite_id",
            name="uq_favorite_campsites_favorite_campsite",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    favorite_id: Mapped[str] = mapped_column(
        ForeignKey("favorites.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    campsite_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        nullable=False,
        index=True,
        doc=(
            "Referenced campsite. Existence is only checked when a single"
            " campsite is added; no foreign key, so expansion skips references"
            " whose campsite has since been removed."
        ),
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    favorite: Mapped[Favorite] = relationship("Favorite", back_populates="entries")
    campsite: Mapped[Campsite | None] = relationship(
        "Campsite",
        primaryjoin="foreign(FavoriteCampsite.campsite_id) == Campsite.id",
        viewonly=True,
    )
