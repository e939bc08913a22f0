"""Screen models for the catalog list and the favorites page."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from .channel import FavoritesChannel
from .errors import NotFoundError
from .favorites import ToggleEvent, ToggleState
from .models import Product, ProductPage
from .session import AuthContext

logger = logging.getLogger(__name__)


class CatalogApi(Protocol):
    async def list_products(
        self,
        *,
        page: int = 1,
        limit: int | None = None,
        search: str | None = None,
    ) -> ProductPage: ...

    async def get_product(self, product_id: str) -> Product: ...


class Debouncer:
    """Run ``callback`` with the latest submitted value after ``delay`` seconds of quiet."""

    def __init__(self, delay: float, callback: Callable[[str], Awaitable[object]]) -> None:
        self.delay = delay
        self._callback = callback
        self._task: asyncio.Task[None] | None = None

    def submit(self, value: str) -> None:
        self.cancel()
        self._task = asyncio.create_task(self._run(value))

    def cancel(self) -> None:
        task = self._task
        if task is None:
            return
        if not task.done():
            if task is asyncio.current_task():
                return
            task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the scheduled callback, if any, to finish."""

        while self._task is not None:
            task = self._task
            try:
                await task
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
            if self._task is task:
                return

    async def _run(self, value: str) -> None:
        await asyncio.sleep(self.delay)
        await self._callback(value)


class CatalogBrowser:
    """Paged, searchable product list.

    Typing goes through :meth:`set_search_text`, which waits for the user to
    pause before querying. Any new search returns to page 1; page navigation
    is clamped to ``[1, pages]``.
    """

    def __init__(
        self,
        api: CatalogApi,
        *,
        page_size: int = 12,
        debounce_seconds: float = 0.45,
    ) -> None:
        self._api = api
        self.page_size = page_size
        self.page = 1
        self.pages = 0
        self.total = 0
        self.search = ""
        self.products: list[Product] = []
        self._debouncer = Debouncer(debounce_seconds, self.apply_search)

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    async def refresh(self) -> ProductPage:
        result = await self._api.list_products(
            page=self.page,
            limit=self.page_size,
            search=self.search or None,
        )
        self.products = list(result.products)
        self.total = result.total
        self.pages = result.pages
        return result

    def set_search_text(self, text: str) -> None:
        self._debouncer.submit(text)

    async def wait_for_search(self) -> None:
        await self._debouncer.wait()

    async def apply_search(self, text: str) -> ProductPage:
        """Search immediately, skipping the debounce (e.g. the clear button)."""

        self._debouncer.cancel()
        self.search = text.strip()
        self.page = 1
        return await self.refresh()

    async def go_to(self, page: int) -> ProductPage | None:
        target = max(1, min(page, max(self.pages, 1)))
        if target == self.page and self.products:
            return None
        self.page = target
        return await self.refresh()

    async def next_page(self) -> ProductPage | None:
        if not self.has_next:
            return None
        return await self.go_to(self.page + 1)

    async def previous_page(self) -> ProductPage | None:
        if not self.has_previous:
            return None
        return await self.go_to(self.page - 1)

    def close(self) -> None:
        self._debouncer.cancel()


class FavoritesView:
    """Products the signed-in user has favorited.

    Ids whose product has been deleted are skipped. A product unfavorited
    from any control disappears at once; one favorited elsewhere is fetched
    and appended.
    """

    def __init__(self, api: CatalogApi, auth: AuthContext, channel: FavoritesChannel) -> None:
        self._api = api
        self._auth = auth
        self.products: list[Product] = []
        self._fetches: set[asyncio.Task[None]] = set()
        self._unsubscribe = channel.subscribe(None, self._on_event)

    async def load(self) -> list[Product]:
        session = self._auth.session
        if session is None:
            self.products = []
            return self.products

        products = []
        for product_id in session.user.favorites:
            product = await self._fetch(product_id)
            if product is not None:
                products.append(product)
        self.products = products
        return self.products

    async def settle(self) -> None:
        """Wait for background fetches triggered by favorite events."""

        while self._fetches:
            await asyncio.gather(*self._fetches)

    def close(self) -> None:
        self._unsubscribe()
        for task in self._fetches:
            task.cancel()

    async def _fetch(self, product_id: str) -> Product | None:
        try:
            return await self._api.get_product(product_id)
        except NotFoundError:
            logger.warning("Skipping favorite %s: product no longer exists", product_id)
            return None

    def _on_event(self, event: ToggleEvent) -> None:
        if event.state is not ToggleState.COMMITTED:
            return
        if not event.favorited:
            self.products = [p for p in self.products if p.id != event.product_id]
        elif all(p.id != event.product_id for p in self.products):
            task = asyncio.create_task(self._append(event.product_id))
            self._fetches.add(task)
            task.add_done_callback(self._fetches.discard)

    async def _append(self, product_id: str) -> None:
        product = await self._fetch(product_id)
        if product is not None and all(p.id != product_id for p in self.products):
            self.products.append(product)
