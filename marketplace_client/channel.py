"""Publish/subscribe fan-out of favorite changes across views."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .favorites import ToggleEvent

logger = logging.getLogger(__name__)

FavoriteListener = Callable[["ToggleEvent"], None]


class FavoritesChannel:
    """Delivers :class:`ToggleEvent` objects to interested views.

    Listeners subscribe to one product id, or to ``None`` for every product.
    A listener that raises is logged and skipped; the others still run.
    """

    def __init__(self) -> None:
        self._listeners: dict[str | None, list[FavoriteListener]] = defaultdict(list)

    def subscribe(
        self,
        product_id: str | None,
        listener: FavoriteListener,
    ) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners[product_id].append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(product_id)
            if listeners and listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def publish(self, event: ToggleEvent) -> None:
        targets = [
            *self._listeners.get(event.product_id, ()),
            *self._listeners.get(None, ()),
        ]
        for listener in targets:
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Favorites listener failed for product %s", event.product_id
                )
