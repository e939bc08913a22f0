"""Business logic behind ``POST``/``DELETE /products/{id}/favorite``.

Both mutations read the user row, edit its favorites list in memory and write
the whole list back. No lock or atomic array operation is used, so two
concurrent requests for the same user can interleave and the later write
silently replaces the earlier one (last write wins). Callers receive the list
as it stood after their own write, which is the authoritative value clients
reconcile against.
"""

from __future__ import annotations

import logging

from marketplace_api.db.models import User
from marketplace_api.db.repositories import UserRepository
from marketplace_api.errors import NotFound

logger = logging.getLogger(__name__)


def _deduplicated(favorites: list[str]) -> list[str]:
    """Return ``favorites`` without repeats, keeping first occurrences."""

    return list(dict.fromkeys(favorites))


class FavoritesService:
    """Mutates a user's favorite product ids."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    async def add_favorite(self, *, user_id: str, product_id: str) -> list[str]:
        """Append ``product_id`` unless present; always return the full list."""

        user = await self._require_user(user_id)
        current = _deduplicated(user.favorites or [])

        if product_id not in current:
            current.append(product_id)
            await self._users.save_favorites(user, current)
            logger.debug("User %s favorited product %s", user_id, product_id)
        elif len(current) != len(user.favorites or []):
            await self._users.save_favorites(user, current)

        return list(user.favorites)

    async def remove_favorite(self, *, user_id: str, product_id: str) -> list[str]:
        """Remove ``product_id`` when present; absent ids are a no-op."""

        user = await self._require_user(user_id)
        current = user.favorites or []
        remaining = [fav for fav in _deduplicated(current) if fav != product_id]

        if remaining != current:
            await self._users.save_favorites(user, remaining)
            logger.debug("User %s unfavorited product %s", user_id, product_id)

        return list(user.favorites)

    async def _require_user(self, user_id: str) -> User:
        user = await self._users.get(user_id)
        if user is None:
            # The token verified, but the account is gone.
            raise NotFound("User not found")
        return user
