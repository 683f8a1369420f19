"""Pydantic schemas for API responses."""

from campsite_api.schemas.campsite import CampsiteSummary, UserSummary  # noqa: F401
from campsite_api.schemas.favorites import (  # noqa: F401
    FavoriteBulkAddRequest,
    FavoriteDetail,
    FavoriteListResponse,
    FavoriteMutationResult,
    FavoriteOutcome,
    FavoriteRead,
)
