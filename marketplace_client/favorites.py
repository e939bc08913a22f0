"""Optimistic, single-flight favorite toggling shared by every front-end.

A :class:`FavoriteToggle` backs one heart control. Pressing it flips the
local flag at once and publishes a ``PENDING`` event, then awaits the API.
On success the server's list replaces the session's favorites and the flag
is re-derived from it (``COMMITTED``); on failure the flag reverts and the
session is left alone (``ROLLED_BACK``). While a request is outstanding the
toggle ignores further presses.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from .channel import FavoritesChannel
from .errors import ApiError
from .session import AuthContext, AuthSession

logger = logging.getLogger(__name__)


class FavoritesApi(Protocol):
    async def add_favorite(self, session: AuthSession, product_id: str) -> list[str]: ...

    async def remove_favorite(self, session: AuthSession, product_id: str) -> list[str]: ...


class ToggleState(str, enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class ToggleEvent:
    product_id: str
    state: ToggleState
    favorited: bool
    favorites: tuple[str, ...] | None = None
    error: BaseException | None = None
    source: object | None = None


class FavoriteToggle:
    """State machine for one favorite control bound to ``product_id``."""

    def __init__(self, controller: FavoriteController, product_id: str) -> None:
        self._controller = controller
        self.product_id = product_id
        self._state = ToggleState.IDLE
        self._favorited = controller.is_favorited(product_id)
        self._unsubscribe = controller.channel.subscribe(product_id, self._on_event)

    @property
    def state(self) -> ToggleState:
        return self._state

    @property
    def favorited(self) -> bool:
        return self._favorited

    @property
    def pending(self) -> bool:
        return self._state is ToggleState.PENDING

    async def toggle(self) -> ToggleEvent | None:
        """Run one toggle to completion.

        Returns the settling event, or ``None`` when the press was ignored
        because a request is already in flight.
        """

        started = self._begin()
        if started is None:
            return None
        return await self._settle(*started)

    def press(self) -> asyncio.Task[ToggleEvent] | None:
        """Start a toggle in the background, for callbacks that cannot await.

        The optimistic flip happens before this returns.
        """

        started = self._begin()
        if started is None:
            return None
        return asyncio.create_task(self._settle(*started))

    def refresh(self) -> None:
        """Re-derive the flag from the session unless a request is in flight."""

        if not self.pending:
            self._favorited = self._controller.is_favorited(self.product_id)

    def close(self) -> None:
        self._unsubscribe()

    def _begin(self) -> tuple[AuthSession, bool] | None:
        if self.pending:
            logger.debug("Ignoring toggle for %s while a request is pending", self.product_id)
            return None

        session = self._controller.auth.require_session()
        previous = self._favorited
        self._favorited = not previous
        self._state = ToggleState.PENDING
        self._publish(ToggleEvent(self.product_id, ToggleState.PENDING, self._favorited, source=self))
        return session, previous

    async def _settle(self, session: AuthSession, previous: bool) -> ToggleEvent:
        api = self._controller.api
        try:
            if self._favorited:
                favorites = await api.add_favorite(session, self.product_id)
            else:
                favorites = await api.remove_favorite(session, self.product_id)
        except (ApiError, httpx.HTTPError, ValueError) as exc:
            # ValueError covers undecodable or malformed response bodies.
            logger.warning("Favorite toggle for %s failed: %s", self.product_id, exc)
            self._favorited = previous
            self._state = ToggleState.ROLLED_BACK
            event = ToggleEvent(
                self.product_id,
                ToggleState.ROLLED_BACK,
                previous,
                error=exc,
                source=self,
            )
        except BaseException:
            self._favorited = previous
            self._state = ToggleState.ROLLED_BACK
            raise
        else:
            self._controller.auth.sync_favorites(favorites)
            self._favorited = self.product_id in favorites
            self._state = ToggleState.COMMITTED
            event = ToggleEvent(
                self.product_id,
                ToggleState.COMMITTED,
                self._favorited,
                favorites=tuple(favorites),
                source=self,
            )

        self._publish(event)
        return event

    def _publish(self, event: ToggleEvent) -> None:
        self._controller.channel.publish(event)

    def _on_event(self, event: ToggleEvent) -> None:
        # Another control for the same product settled; follow it when idle.
        if event.source is self or event.state is not ToggleState.COMMITTED:
            return
        if not self.pending:
            self._favorited = event.favorited


class FavoriteController:
    """Hands out toggles and answers favorite membership from the session."""

    def __init__(
        self,
        api: FavoritesApi,
        auth: AuthContext,
        channel: FavoritesChannel | None = None,
    ) -> None:
        self.api = api
        self.auth = auth
        self.channel = channel or FavoritesChannel()
        self._shared: dict[str, FavoriteToggle] = {}

    def is_favorited(self, product_id: str) -> bool:
        session = self.auth.session
        return session is not None and product_id in session.user.favorites

    def bind(self, product_id: str) -> FavoriteToggle:
        """Create a toggle for a newly mounted control."""

        return FavoriteToggle(self, product_id)

    def toggle_for(self, product_id: str) -> FavoriteToggle:
        toggle = self._shared.get(product_id)
        if toggle is None:
            toggle = self._shared[product_id] = self.bind(product_id)
        else:
            toggle.refresh()
        return toggle

    async def toggle(self, product_id: str) -> ToggleEvent | None:
        """Toggle ``product_id`` through the controller's shared toggle."""

        return await self.toggle_for(product_id).toggle()

    def close(self) -> None:
        for toggle in self._shared.values():
            toggle.close()
        self._shared.clear()
