#!/usr/bin/env python
"""Initialize database tables.

Usage:
    python scripts/init_db.py
"""

import asyncio

from marketplace_api.db.connection import dispose_engine, get_engine
from marketplace_api.main import validate_environment
from marketplace_api.warmup import create_tables


async def init_db() -> None:
    await create_tables(get_engine())
    await dispose_engine()
    print("✓ Database tables created successfully")


if __name__ == "__main__":
    validate_environment()
    asyncio.run(init_db())
