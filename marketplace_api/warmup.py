"""Startup warm-up so the first request does not pay for connection setup."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from marketplace_api.db.models import Base

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables; existing tables are left untouched."""

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def warmup_database(
    resolve_db_type: Callable[[], str] | None = None,
    resolve_engine: Callable[[], AsyncEngine] | None = None,
) -> None:
    """Open a pooled connection and run ``SELECT 1``.

    SQLite databases also get their tables created here because they are
    local development stores without a separate migration step. Failures are
    logged rather than raised so the API can still start and report database
    errors per request.
    """
    if resolve_db_type is None:
        from marketplace_api.db.connection import get_database_type as resolve_db_type

    if resolve_engine is None:
        from marketplace_api.db.connection import get_engine as resolve_engine

    try:
        start = time.time()
        db_type = resolve_db_type()
        engine = resolve_engine()

        if db_type == "sqlite":
            await create_tables(engine)
            logger.info("SQLite mode - tables created if missing")

        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))

        elapsed = (time.time() - start) * 1000
        logger.info("Database connection warmed up (%.0fms)", elapsed)
    except Exception as exc:
        logger.warning("Database warmup failed: %s", exc)
