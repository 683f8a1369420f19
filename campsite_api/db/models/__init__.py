from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from campsite_api.utils.identifiers import OBJECT_ID_LENGTH, new_object_id


class Base(DeclarativeBase):
    pass


def utcnow():
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


class User(Base):
    """Account provisioned by the identity provider.

    The favorites service never writes to this table; rows are only read to
    expand the ``owner`` of each favorite list.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=new_object_id
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    admin: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class Campsite(Base):
    __tablename__ = "campsites"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=new_object_id
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String(2048), nullable=False)
    image: Mapped[str | None] = mapped_column(String(512), nullable=True)
    elevation: Mapped[int | None] = mapped_column(
        Integer, nullable=True, doc="Elevation in feet above sea level"
    )
    cost: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True, doc="Nightly fee in USD"
    )
    featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


# Imported late to avoid circular dependency with favorites module.
from .favorites import Favorite, FavoriteCampsite  # noqa: E402

__all__ = [
    "Base",
    "Campsite",
    "Favorite",
    "FavoriteCampsite",
    "User",
    "utcnow",
]
