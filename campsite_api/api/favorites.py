"""FastAPI router exposing the caller's favorite campsites."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from campsite_api.api.dependencies import get_current_user_id
from campsite_api.schemas.favorites import (
    FavoriteBulkAddRequest,
    FavoriteListResponse,
    FavoriteMutationResult,
    FavoriteRead,
)
from campsite_api.services.favorites_service import (
    FavoritesService,
    get_favorites_service,
)

router = APIRouter()


def _not_supported(method: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=f"{method} operation not supported on /favorites",
    )


@router.get("", response_model=FavoriteListResponse)
async def list_favorites(
    _user_id: str = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteListResponse:
    """Return every favorite list with owners and campsites expanded."""

    return await service.list_favorites()


@router.post("", response_model=FavoriteRead)
async def bulk_add_favorites(
    payload: FavoriteBulkAddRequest,
    user_id: str = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteRead:
    """Merge several campsites into the caller's list, creating it if needed."""

    try:
        return await service.bulk_add_favorites(
            user_id=user_id, campsite_ids=payload.campsite_ids
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("")
async def replace_favorites(_user_id: str = Depends(get_current_user_id)) -> None:
    raise _not_supported("PUT")


@router.delete("", response_model=FavoriteMutationResult)
async def remove_all_favorites(
    user_id: str = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteMutationResult:
    """Delete the caller's list; reports ``nothing_to_delete`` when absent."""

    return await service.remove_all_favorites(user_id=user_id)


@router.get("/{campsite_id}")
async def get_favorite(campsite_id: str) -> None:
    raise _not_supported("GET")


@router.post("/{campsite_id}", response_model=FavoriteMutationResult)
async def add_single_favorite(
    campsite_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteMutationResult:
    """Add one campsite after checking it exists."""

    try:
        return await service.add_single_favorite(user_id=user_id, campsite_id=campsite_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/{campsite_id}")
async def replace_favorite(
    campsite_id: str, _user_id: str = Depends(get_current_user_id)
) -> None:
    raise _not_supported("PUT")


@router.delete("/{campsite_id}", response_model=FavoriteMutationResult)
async def remove_single_favorite(
    campsite_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteMutationResult:
    """Remove one campsite from the caller's list."""

    try:
        return await service.remove_single_favorite(
            user_id=user_id, campsite_id=campsite_id
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
