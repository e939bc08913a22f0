"""Pytest configuration shared by the API and client test suites.

Database fixtures run against an in-memory SQLite database. ``StaticPool``
keeps a single connection alive so every session, including the ones opened
per request by the FastAPI app, sees the same tables.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from tests import _ensure_repo_on_path

TEST_JWT_SECRET = "test-secret-with-enough-bytes-for-hs256-signing"


def pytest_configure(config: pytest.Config) -> None:
    """Hook executed by pytest prior to running any tests."""

    _ensure_repo_on_path()
    # Settings are cached on first use, so the secret must be in place before
    # any test module imports the application.
    os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)


@pytest_asyncio.fixture
async def engine():
    pytest.importorskip("aiosqlite")
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from marketplace_api.warmup import create_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    """Provide a session on the in-memory database for repository tests."""

    from marketplace_api.db.connection import create_session_factory

    factory = create_session_factory(engine)
    async with factory() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()


@pytest_asyncio.fixture
async def app(engine) -> AsyncIterator:
    """The FastAPI app with ``get_db`` bound to the in-memory database."""

    from marketplace_api.db.connection import create_session_factory, get_db
    from marketplace_api.main import app as fastapi_app

    factory = create_session_factory(engine)

    async def override_get_db():
        async with factory() as db_session:
            try:
                yield db_session
                await db_session.commit()
            except Exception:
                await db_session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def http_client(app) -> AsyncIterator:
    """An ``httpx.AsyncClient`` talking to the app in-process."""

    from httpx import ASGITransport, AsyncClient

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
