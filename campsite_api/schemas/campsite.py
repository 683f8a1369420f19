"""Read models for the records a favorite list references."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CampsiteSummary(BaseModel):
    """Campsite details embedded in expanded favorite lists."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="24-character hexadecimal campsite identifier")
    name: str
    description: str
    image: str | None = None
    elevation: int | None = Field(None, description="Elevation in feet")
    cost: float | None = Field(None, ge=0, description="Nightly fee in USD")
    featured: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserSummary(BaseModel):
    """Public profile of a favorite list owner."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    first_name: str | None = None
    last_name: str | None = None
    admin: bool = False
