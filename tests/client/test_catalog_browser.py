"""Tests for debounced search and clamped paging."""

from __future__ import annotations

import asyncio

import pytest

from marketplace_client.catalog import CatalogBrowser, Debouncer
from tests.client.fakes import FakeMarketplaceApi, make_product


@pytest.fixture
def catalog_api() -> FakeMarketplaceApi:
    products = [make_product(n) for n in range(1, 26)]
    products.append(make_product(99, title="Brass Lamp"))
    return FakeMarketplaceApi(products)


@pytest.mark.asyncio
async def test_refresh_loads_first_page(catalog_api):
    browser = CatalogBrowser(catalog_api, page_size=12)

    page = await browser.refresh()

    assert len(browser.products) == 12
    assert (page.total, browser.pages) == (26, 3)
    assert catalog_api.list_calls == [{"page": 1, "limit": 12, "search": None}]


@pytest.mark.asyncio
async def test_paging_is_clamped(catalog_api):
    browser = CatalogBrowser(catalog_api, page_size=12)
    await browser.refresh()

    assert await browser.previous_page() is None
    await browser.next_page()
    await browser.next_page()
    assert await browser.next_page() is None
    assert browser.page == 3
    assert len(browser.products) == 2

    await browser.go_to(99)
    assert browser.page == 3


@pytest.mark.asyncio
async def test_typing_is_debounced_and_resets_page(catalog_api):
    browser = CatalogBrowser(catalog_api, page_size=12, debounce_seconds=0.01)
    await browser.refresh()
    await browser.next_page()

    for partial in ("l", "la", "lam", "lamp"):
        browser.set_search_text(partial)
    await browser.wait_for_search()

    searches = [call["search"] for call in catalog_api.list_calls[2:]]
    assert searches == ["lamp"]
    assert browser.page == 1
    assert [p.title for p in browser.products] == ["Brass Lamp"]


@pytest.mark.asyncio
async def test_clearing_search_applies_immediately(catalog_api):
    browser = CatalogBrowser(catalog_api, page_size=12, debounce_seconds=10)
    browser.set_search_text("lamp")

    await browser.apply_search("")

    assert catalog_api.list_calls == [{"page": 1, "limit": 12, "search": None}]
    assert browser.total == 26
    browser.close()


@pytest.mark.asyncio
async def test_debouncer_runs_only_latest_value():
    calls: list[str] = []

    async def record(value: str) -> None:
        calls.append(value)

    debouncer = Debouncer(0.01, record)
    debouncer.submit("a")
    debouncer.submit("ab")
    await debouncer.wait()
    await asyncio.sleep(0.02)

    assert calls == ["ab"]
