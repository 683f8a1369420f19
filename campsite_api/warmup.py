"""Open a database connection at startup so the first request skips the handshake."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from campsite_api.db.connection import begin_engine_transaction

logger = logging.getLogger(__name__)


async def warmup_database(
    resolve_db_type: Callable[[], str] | None = None,
    resolve_engine: Callable[[], AsyncEngine] | None = None,
) -> bool:
    """Ping the database with ``SELECT 1``.

    Failures are logged and reported through the return value; the API still
    starts so health checks can report the outage.
    """
    try:
        if resolve_db_type is None:
            from campsite_api.db.connection import get_database_type as resolve_db_type

        if resolve_engine is None:
            from campsite_api.db.connection import get_engine as resolve_engine

        start = time.time()
        db_type = resolve_db_type()
        logger.debug("Database warmup target detected as %s", db_type)

        engine = resolve_engine()
        async with begin_engine_transaction(engine) as conn:
            await conn.execute(text("SELECT 1"))

        elapsed = (time.time() - start) * 1000
        logger.info(f"✓ Database connection warmed up ({elapsed:.0f}ms)")
        return True
    except Exception as e:
        logger.warning(f"Database warmup failed: {e}")
        return False
