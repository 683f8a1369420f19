"""Read-only campsite lookups used to validate favorite references."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from campsite_api.db.models import Campsite
from campsite_api.schemas.campsite import CampsiteSummary
from campsite_api.services.errors import StoreFailureError

logger = logging.getLogger(__name__)


class CampsiteRepository:
    """Directory of campsites backed by the ``campsites`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, campsite_id: str) -> CampsiteSummary | None:
        """Return the campsite or ``None``; callers validate the id format first."""

        try:
            campsite = await self._session.get(Campsite, campsite_id)
        except SQLAlchemyError as exc:
            logger.error("Campsite lookup failed for %s: %s", campsite_id, exc)
            raise StoreFailureError("find_by_id") from exc
        if campsite is None:
            return None
        return CampsiteSummary.model_validate(campsite)
