"""Credential store: user records and their favorite product ids."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select

from marketplace_api.db.models import User
from marketplace_api.db.repositories.base import BaseRepository


def normalize_email(email: str) -> str:
    """Return the canonical (trimmed, lower-cased) form of ``email``."""

    return email.strip().lower()


class UserRepository(BaseRepository):
    """Encapsulates SQLAlchemy operations on the ``users`` table."""

    async def get(self, user_id: str) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        """Look up a user by email, ignoring case and surrounding whitespace."""

        query = select(User).where(User.email == normalize_email(email))
        result = await self._session.execute(query)
        return result.scalars().first()

    async def create(self, *, name: str, email: str, password_hash: str) -> User:
        """Persist a new user with an empty favorites list."""

        user = User(
            name=name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            favorites=[],
        )
        self._session.add(user)
        await self._session.flush()
        return user

    async def save_favorites(self, user: User, favorites: Sequence[str]) -> User:
        """Replace the user's favorites with ``favorites``.

        A fresh list is assigned because in-place mutation of a JSON column is
        invisible to the unit of work. There is no row lock: two concurrent
        writers for the same user both read, both write, and the last write
        wins.
        """

        user.favorites = list(favorites)
        await self._session.flush()
        return user
