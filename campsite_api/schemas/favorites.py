"""Pydantic schemas that power the favorites API surface."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campsite_api.schemas.campsite import CampsiteSummary, UserSummary
from campsite_api.utils.identifiers import normalize_object_id


class FavoriteBulkAddRequest(BaseModel):
    """Payload for merging several campsites into the caller's list."""

    campsite_ids: list[str] = Field(
        ...,
        description=(
            "Campsite identifiers to add. Duplicates collapse; identifiers"
            " already in the list are ignored."
        ),
    )

    @field_validator("campsite_ids")
    @classmethod
    def _validate_campsite_ids(cls, value: list[str]) -> list[str]:
        """Reject malformed identifiers, lower-case the rest and collapse duplicates."""

        cleaned: list[str] = []
        for raw in value:
            token = normalize_object_id(raw)
            if token is None:
                raise ValueError(f"{raw!r} is not a valid campsite identifier")
            if token not in cleaned:
                cleaned.append(token)
        return cleaned


class FavoriteRead(BaseModel):
    """A favorite list with raw campsite identifiers."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Identifier of the favorite list")
    owner: str = Field(..., description="Identifier of the owning user")
    campsites: list[str] = Field(
        default_factory=list, description="Campsite identifiers in the list"
    )
    created_at: datetime
    updated_at: datetime


class FavoriteDetail(BaseModel):
    """A favorite list with its owner and campsites expanded."""

    id: str
    user: UserSummary
    campsites: list[CampsiteSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class FavoriteListResponse(BaseModel):
    """Container returned by the listing endpoint."""

    total: int
    favorites: list[FavoriteDetail]


class FavoriteOutcome(str, Enum):
    """Distinguishes the success outcomes of favorite mutations."""

    ADDED = "added"
    ALREADY_PRESENT = "already_present"
    REMOVED = "removed"
    DELETED = "deleted"
    NOTHING_TO_DELETE = "nothing_to_delete"


class FavoriteMutationResult(BaseModel):
    """Outcome of a mutation together with the affected list, when any."""

    outcome: FavoriteOutcome
    favorite: FavoriteRead | None = None
    message: str | None = Field(
        None, description="Human-readable note for no-op outcomes"
    )
