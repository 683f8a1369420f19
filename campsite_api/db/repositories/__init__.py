"""Repository implementations backing the favorites service."""

from .campsite_repository import CampsiteRepository
from .favorite_repository import (
    FavoriteRepository,
    favorite_to_detail,
    favorite_to_schema,
)

__all__ = [
    "CampsiteRepository",
    "FavoriteRepository",
    "favorite_to_detail",
    "favorite_to_schema",
]
