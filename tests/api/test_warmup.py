"""Regression tests for the startup warm-up routine."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy import inspect

import marketplace_api.warmup as warmup


class _BrokenEngine:
    def begin(self):
        raise ConnectionRefusedError("database offline")


@pytest.mark.asyncio
async def test_warmup_creates_sqlite_tables(engine):
    async with engine.begin() as conn:
        await conn.run_sync(lambda sync_conn: warmup.Base.metadata.drop_all(sync_conn))

    await warmup.warmup_database(
        resolve_db_type=lambda: "sqlite",
        resolve_engine=lambda: engine,
    )

    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert {"users", "products"} <= set(tables)


@pytest.mark.asyncio
async def test_warmup_logs_failures_instead_of_raising(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.WARNING)

    await warmup.warmup_database(
        resolve_db_type=lambda: "postgresql",
        resolve_engine=lambda: _BrokenEngine(),
    )

    assert any("Database warmup failed" in record.getMessage() for record in caplog.records)
