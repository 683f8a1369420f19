"""Business logic powering the favorites API endpoints.

:class:`FavoritesService` reconciles a user's favorite list against two
collaborators:

* a campsite directory (:class:`CampsiteDirectoryProtocol`) consulted when a
  single campsite is added, and
* a favorite store (:class:`FavoriteStoreProtocol`) that owns the one-list-per-
  user invariant through its atomic ``upsert_add_campsites`` primitive.

Every public method performs at most one read-modify-write against the store
and either returns a schema or raises one of the errors in
:mod:`campsite_api.services.errors`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campsite_api.db.connection import get_db
from campsite_api.db.repositories import CampsiteRepository, FavoriteRepository
from campsite_api.schemas.campsite import CampsiteSummary
from campsite_api.schemas.favorites import (
    FavoriteDetail,
    FavoriteListResponse,
    FavoriteMutationResult,
    FavoriteOutcome,
    FavoriteRead,
)
from campsite_api.services.errors import CampsiteNotFoundError, InvalidReferenceError
from campsite_api.utils.identifiers import normalize_object_id

logger = logging.getLogger(__name__)

ALREADY_PRESENT_MESSAGE = "Campsite is already in the list of favorites"
NOTHING_TO_DELETE_MESSAGE = "You do not have any favorites to delete"


class CampsiteDirectoryProtocol(Protocol):
    """Minimal campsite lookup surface required by :class:`FavoritesService`."""

    async def find_by_id(self, campsite_id: str) -> CampsiteSummary | None:
        """Return the campsite, or ``None`` when it does not exist."""


class FavoriteStoreProtocol(Protocol):
    """Persistence surface for favorite lists keyed by owner."""

    async def find_by_user(self, user_id: str) -> FavoriteRead | None:
        """Return the user's list, if any."""

    async def upsert_add_campsites(
        self, user_id: str, campsite_ids: Sequence[str]
    ) -> FavoriteRead:
        """Atomically union ids into the user's list, creating it if absent."""

    async def delete_by_user(self, user_id: str) -> FavoriteRead | None:
        """Delete the user's list, returning it when one existed."""

    async def save(self, favorite: FavoriteRead) -> FavoriteRead:
        """Persist the campsite set of an existing list."""

    async def find_all_expanded(self) -> list[FavoriteDetail]:
        """Return every list with owner and campsites resolved."""


def _require_valid_reference(campsite_id: str) -> str:
    normalized = normalize_object_id(campsite_id)
    if normalized is None:
        raise InvalidReferenceError(campsite_id)
    return normalized


class FavoritesService:
    """Reconciles favorite lists with the campsite directory and the store."""

    def __init__(
        self,
        *,
        store: FavoriteStoreProtocol,
        directory: CampsiteDirectoryProtocol,
    ) -> None:
        self._store = store
        self._directory = directory

    async def list_favorites(self) -> FavoriteListResponse:
        """Return every user's list with owners and campsites expanded."""

        favorites = await self._store.find_all_expanded()
        return FavoriteListResponse(total=len(favorites), favorites=favorites)

    async def bulk_add_favorites(
        self, *, user_id: str, campsite_ids: Sequence[str]
    ) -> FavoriteRead:
        """Union ``campsite_ids`` into the user's list without existence checks."""

        validated = [_require_valid_reference(campsite_id) for campsite_id in campsite_ids]
        favorite = await self._store.upsert_add_campsites(user_id, validated)
        logger.info(
            "Merged %d campsite(s) into favorites of user %s (now %d)",
            len(set(validated)),
            user_id,
            len(favorite.campsites),
        )
        return favorite

    async def add_single_favorite(
        self, *, user_id: str, campsite_id: str
    ) -> FavoriteMutationResult:
        """Add one existing campsite; report ``already_present`` when it is."""

        campsite_id = _require_valid_reference(campsite_id)
        campsite = await self._directory.find_by_id(campsite_id)
        if campsite is None:
            raise CampsiteNotFoundError(campsite_id)

        current = await self._store.find_by_user(user_id)
        if current is not None and campsite_id in current.campsites:
            logger.debug(
                "Campsite %s already in favorites of user %s", campsite_id, user_id
            )
            return FavoriteMutationResult(
                outcome=FavoriteOutcome.ALREADY_PRESENT,
                favorite=current,
                message=ALREADY_PRESENT_MESSAGE,
            )

        favorite = await self._store.upsert_add_campsites(user_id, [campsite_id])
        logger.info("Added campsite %s to favorites of user %s", campsite_id, user_id)
        return FavoriteMutationResult(outcome=FavoriteOutcome.ADDED, favorite=favorite)

    async def remove_all_favorites(self, *, user_id: str) -> FavoriteMutationResult:
        """Delete the user's list; a missing list is a successful no-op."""

        deleted = await self._store.delete_by_user(user_id)
        if deleted is None:
            return FavoriteMutationResult(
                outcome=FavoriteOutcome.NOTHING_TO_DELETE,
                message=NOTHING_TO_DELETE_MESSAGE,
            )

        logger.info(
            "Deleted favorites of user %s (%d campsite(s))",
            user_id,
            len(deleted.campsites),
        )
        return FavoriteMutationResult(outcome=FavoriteOutcome.DELETED, favorite=deleted)

    async def remove_single_favorite(
        self, *, user_id: str, campsite_id: str
    ) -> FavoriteMutationResult:
        """Remove one campsite from the list; absent campsites leave it unchanged.

        A list emptied by this call is kept rather than deleted.
        """

        campsite_id = _require_valid_reference(campsite_id)
        current = await self._store.find_by_user(user_id)
        if current is None:
            return FavoriteMutationResult(
                outcome=FavoriteOutcome.NOTHING_TO_DELETE,
                message=NOTHING_TO_DELETE_MESSAGE,
            )

        if campsite_id not in current.campsites:
            return FavoriteMutationResult(outcome=FavoriteOutcome.REMOVED, favorite=current)

        remaining = [item for item in current.campsites if item != campsite_id]
        favorite = await self._store.save(current.model_copy(update={"campsites": remaining}))
        logger.info("Removed campsite %s from favorites of user %s", campsite_id, user_id)
        return FavoriteMutationResult(outcome=FavoriteOutcome.REMOVED, favorite=favorite)


async def get_favorites_service(
    session: AsyncSession = Depends(get_db),
) -> FavoritesService:
    """FastAPI dependency that wires the service to the request session."""

    return FavoritesService(
        store=FavoriteRepository(session),
        directory=CampsiteRepository(session),
    )
