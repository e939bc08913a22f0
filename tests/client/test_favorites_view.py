"""Tests for the favorites screen model."""

from __future__ import annotations

import pytest

from marketplace_client.catalog import FavoritesView
from marketplace_client.session import AuthContext
from tests.client.fakes import NETWORK_FAILURES


@pytest.mark.asyncio
async def test_load_skips_deleted_products(fake_api, auth, channel):
    auth.sync_favorites(["p1", "gone", "p3"])
    view = FavoritesView(fake_api, auth, channel)

    products = await view.load()

    assert [p.id for p in products] == ["p1", "p3"]


@pytest.mark.asyncio
async def test_load_without_session_is_empty(fake_api, storage, channel):
    view = FavoritesView(fake_api, AuthContext(fake_api, storage), channel)

    assert await view.load() == []


@pytest.mark.asyncio
async def test_unfavorited_product_disappears_without_reload(fake_api, auth, channel, controller):
    await controller.toggle("p1")
    await controller.toggle("p2")
    view = FavoritesView(fake_api, auth, channel)
    await view.load()

    await controller.bind("p1").toggle()

    assert [p.id for p in view.products] == ["p2"]


@pytest.mark.asyncio
async def test_failed_unfavorite_keeps_product(fake_api, auth, channel, controller):
    await controller.toggle("p1")
    view = FavoritesView(fake_api, auth, channel)
    await view.load()
    fake_api.fail_with = NETWORK_FAILURES[0]
    await controller.bind("p1").toggle()

    assert [p.id for p in view.products] == ["p1"]


@pytest.mark.asyncio
async def test_product_favorited_elsewhere_is_appended(fake_api, auth, channel, controller):
    view = FavoritesView(fake_api, auth, channel)
    await view.load()

    await controller.toggle("p3")
    await view.settle()

    assert [p.id for p in view.products] == ["p3"]
    view.close()
