"""The client stack driving the real API in-process."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from marketplace_client.api import ApiClient
from marketplace_client.catalog import CatalogBrowser, FavoritesView
from marketplace_client.channel import FavoritesChannel
from marketplace_client.favorites import FavoriteController, ToggleState
from marketplace_client.session import TOKEN_KEY, USER_KEY, AuthContext
from marketplace_client.storage import InMemoryStorage, JsonFileStorage


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    http = httpx.AsyncClient(transport=transport, base_url="http://testserver")
    async with ApiClient(http) as api:
        yield api


async def _seed_products(app, token: str, titles: list[str]) -> list[str]:
    transport = httpx.ASGITransport(app=app)
    ids = []
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        for title in titles:
            response = await http.post(
                "/products",
                json={"title": title, "price": 9.99, "description": "d", "image": "i.png"},
                headers={"Authorization": f"Bearer {token}"},
            )
            ids.append(response.json()["id"])
    return ids


@pytest.mark.asyncio
async def test_favorite_flow_against_api(app, client, tmp_path):
    storage = JsonFileStorage(tmp_path / "session.json")
    auth = AuthContext(client, storage)
    session = await auth.register(name="Ada", email="ada@example.com", password="pw")
    lamp, chair = await _seed_products(app, session.token, ["Lamp", "Chair"])

    channel = FavoritesChannel()
    controller = FavoriteController(client, auth, channel)
    view = FavoritesView(client, auth, channel)

    assert (await controller.toggle(lamp)).state is ToggleState.COMMITTED
    assert (await controller.toggle(chair)).favorites == (lamp, chair)
    await view.load()
    await controller.toggle(lamp)

    assert [p.id for p in view.products] == [chair]
    assert AuthContext(client, JsonFileStorage(storage.path)).load().user.favorites == [chair]

    relogin = await client.login(email="ada@example.com", password="pw")
    assert relogin.user.favorites == [chair]


@pytest.mark.asyncio
async def test_stale_stored_token_rolls_back(app, client):
    registered = await client.register(name="Ada", email="ada@example.com", password="pw")
    (lamp,) = await _seed_products(app, registered.token, ["Lamp"])
    storage = InMemoryStorage(
        {TOKEN_KEY: "stale-token", USER_KEY: registered.user.model_dump_json()}
    )
    auth = AuthContext(client, storage)
    auth.load()
    toggle = FavoriteController(client, auth).bind(lamp)

    event = await toggle.toggle()

    assert event.state is ToggleState.ROLLED_BACK
    assert event.error.status_code == 401
    assert toggle.favorited is False
    assert auth.session.user.favorites == []


@pytest.mark.asyncio
async def test_browser_pages_through_api(app, client):
    registered = await client.register(name="Ada", email="ada@example.com", password="pw")
    await _seed_products(app, registered.token, [f"Item {n}" for n in range(10)])

    browser = CatalogBrowser(client, page_size=6)
    await browser.refresh()
    first = [p.id for p in browser.products]
    await browser.next_page()

    assert browser.pages == 2
    assert len(first) == 6
    assert len(browser.products) == 4
    assert not set(first) & {p.id for p in browser.products}
