"""SQLAlchemy-backed store for per-user favorite lists.

The "one list per user" invariant is enforced by the ``uq_favorites_owner_id``
constraint.  :meth:`FavoriteRepository.upsert_add_campsites` only issues
conditional writes (``INSERT ... ON CONFLICT DO NOTHING``) so concurrent
requests for the same user converge on a single row instead of racing to
create two.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import ColumnElement, Table, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from campsite_api.db.models import Favorite, FavoriteCampsite, utcnow
from campsite_api.schemas.campsite import CampsiteSummary, UserSummary
from campsite_api.schemas.favorites import FavoriteDetail, FavoriteRead
from campsite_api.services.errors import StoreFailureError
from campsite_api.utils.identifiers import new_object_id

logger = logging.getLogger(__name__)

_FAVORITES_TABLE: Table = Favorite.__table__
_MEMBERS_TABLE: Table = FavoriteCampsite.__table__


def favorite_to_schema(favorite: Favorite) -> FavoriteRead:
    """Convert a loaded ORM favorite (entries included) into its read model."""

    return FavoriteRead(
        id=favorite.id,
        owner=favorite.owner_id,
        campsites=favorite.campsite_ids,
        created_at=favorite.created_at,
        updated_at=favorite.updated_at,
    )


def favorite_to_detail(favorite: Favorite) -> FavoriteDetail:
    """Expand owner and campsites, skipping references to removed campsites."""

    return FavoriteDetail(
        id=favorite.id,
        user=UserSummary.model_validate(favorite.owner),
        campsites=[
            CampsiteSummary.model_validate(entry.campsite)
            for entry in favorite.entries
            if entry.campsite is not None
        ],
        created_at=favorite.created_at,
        updated_at=favorite.updated_at,
    )


class FavoriteRepository:
    """Create/read/update/delete favorite lists keyed by owner."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @contextmanager
    def _store_operation(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("Favorites store operation %s failed: %s", operation, exc)
            raise StoreFailureError(operation) from exc

    def _insert(self, table: Table) -> Any:
        """Return the dialect insert construct that supports ``ON CONFLICT``."""

        dialect = self._session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql_insert(table)
        if dialect == "sqlite":
            return sqlite_insert(table)
        raise RuntimeError(f"Unsupported database dialect for favorites upserts: {dialect}")

    async def _load_one(self, *criteria: ColumnElement[bool]) -> Favorite | None:
        query = (
            select(Favorite)
            .options(selectinload(Favorite.entries))
            .where(*criteria)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(query)
        return result.scalars().unique().one_or_none()

    async def find_by_user(self, user_id: str) -> FavoriteRead | None:
        with self._store_operation("find_by_user"):
            favorite = await self._load_one(Favorite.owner_id == user_id)
        return favorite_to_schema(favorite) if favorite is not None else None

    async def upsert_add_campsites(
        self, user_id: str, campsite_ids: Sequence[str]
    ) -> FavoriteRead:
        """Union ``campsite_ids`` into the user's list, creating it when absent."""

        now = utcnow()
        with self._store_operation("upsert_add_campsites"):
            create_list = (
                self._insert(_FAVORITES_TABLE)
                .values(
                    id=new_object_id(),
                    owner_id=user_id,
                    created_at=now,
                    updated_at=now,
                )
                .on_conflict_do_nothing(index_elements=["owner_id"])
            )
            await self._session.execute(create_list)

            favorite_id = (
                await self._session.execute(
                    select(Favorite.id).where(Favorite.owner_id == user_id)
                )
            ).scalar_one()

            unique_ids = list(dict.fromkeys(campsite_ids))
            if unique_ids:
                add_members = (
                    self._insert(_MEMBERS_TABLE)
                    .values(
                        [
                            {
                                "favorite_id": favorite_id,
                                "campsite_id": campsite_id,
                                "added_at": now,
                            }
                            for campsite_id in unique_ids
                        ]
                    )
                    .on_conflict_do_nothing(
                        index_elements=["favorite_id", "campsite_id"]
                    )
                )
                await self._session.execute(add_members)

            await self._session.execute(
                update(_FAVORITES_TABLE)
                .where(_FAVORITES_TABLE.c.id == favorite_id)
                .values(updated_at=now)
            )
            favorite = await self._load_one(Favorite.id == favorite_id)

        if favorite is None:
            raise StoreFailureError("upsert_add_campsites")
        return favorite_to_schema(favorite)

    async def delete_by_user(self, user_id: str) -> FavoriteRead | None:
        """Delete the user's list and return it as it was before deletion."""

        with self._store_operation("delete_by_user"):
            favorite = await self._load_one(Favorite.owner_id == user_id)
            if favorite is None:
                return None
            snapshot = favorite_to_schema(favorite)
            await self._session.delete(favorite)
            await self._session.flush()
        return snapshot

    async def save(self, favorite: FavoriteRead) -> FavoriteRead:
        """Persist the member set of an existing list.

        Entries missing from ``favorite.campsites`` are deleted and new ones
        inserted; entries present on both sides keep their original rows.
        """

        with self._store_operation("save"):
            stored = await self._load_one(Favorite.id == favorite.id)
            if stored is None:
                raise StoreFailureError("save")

            desired = list(dict.fromkeys(favorite.campsites))
            desired_set = set(desired)
            current = {entry.campsite_id for entry in stored.entries}

            for entry in [e for e in stored.entries if e.campsite_id not in desired_set]:
                stored.entries.remove(entry)
            for campsite_id in desired:
                if campsite_id not in current:
                    stored.entries.append(FavoriteCampsite(campsite_id=campsite_id))
            stored.updated_at = utcnow()

            await self._session.flush()
            stored = await self._load_one(Favorite.id == favorite.id)

        if stored is None:
            raise StoreFailureError("save")
        return favorite_to_schema(stored)

    async def find_all_expanded(self) -> list[FavoriteDetail]:
        """Return every list with owner and campsite records resolved."""

        query = (
            select(Favorite)
            .options(
                selectinload(Favorite.owner),
                selectinload(Favorite.entries).selectinload(FavoriteCampsite.campsite),
            )
            .order_by(Favorite.created_at, Favorite.id)
        )
        with self._store_operation("find_all_expanded"):
            result = await self._session.execute(query)
            favorites = result.scalars().unique().all()
        return [favorite_to_detail(favorite) for favorite in favorites]
