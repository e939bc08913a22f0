"""Fixtures shared by the client test-suite."""

from __future__ import annotations

import pytest
import pytest_asyncio

from marketplace_client.channel import FavoritesChannel
from marketplace_client.favorites import FavoriteController
from marketplace_client.session import AuthContext
from marketplace_client.storage import InMemoryStorage
from tests.client.fakes import FakeMarketplaceApi, make_product


@pytest.fixture
def fake_api() -> FakeMarketplaceApi:
    return FakeMarketplaceApi([make_product(n) for n in range(1, 4)])


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest_asyncio.fixture
async def auth(fake_api: FakeMarketplaceApi, storage: InMemoryStorage) -> AuthContext:
    context = AuthContext(fake_api, storage)
    await context.login(email="ada@example.com", password="pw")
    return context


@pytest.fixture
def channel() -> FavoritesChannel:
    return FavoritesChannel()


@pytest.fixture
def controller(fake_api, auth, channel) -> FavoriteController:
    return FavoriteController(fake_api, auth, channel)
