"""Failures raised by the favorites service and its collaborators.

Each error also derives from the builtin the routers already translate
(``ValueError`` -> 400, ``LookupError`` -> 404) so generic handlers keep
working for callers that do not know the specific subclass.
"""

from __future__ import annotations

__all__ = [
    "CampsiteNotFoundError",
    "FavoritesError",
    "InvalidReferenceError",
    "StoreFailureError",
]


class FavoritesError(Exception):
    """Base class for favorites failures."""


class InvalidReferenceError(FavoritesError, ValueError):
    """A campsite identifier is not well formed."""

    def __init__(self, campsite_id: object) -> None:
        super().__init__(f"Invalid campsite ID: {campsite_id!r}")
        self.campsite_id = campsite_id


class CampsiteNotFoundError(FavoritesError, LookupError):
    """A well-formed campsite identifier does not match any campsite."""

    def __init__(self, campsite_id: str) -> None:
        super().__init__(f"Campsite {campsite_id} not found")
        self.campsite_id = campsite_id


class StoreFailureError(FavoritesError, RuntimeError):
    """A persistence operation failed; the original error is chained."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Favorites store failed during {operation}")
        self.operation = operation
