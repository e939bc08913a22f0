"""The signed-in user's session and its owner, :class:`AuthContext`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from .errors import NotAuthenticatedError
from .models import AuthPayload, UserProfile
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


@dataclass(frozen=True)
class AuthSession:
    token: str
    user: UserProfile

    @property
    def favorites(self) -> list[str]:
        return list(self.user.favorites)

    def with_favorites(self, favorites: list[str]) -> AuthSession:
        """Return a copy whose user carries ``favorites``."""

        user = self.user.model_copy(update={"favorites": list(favorites)})
        return AuthSession(token=self.token, user=user)


class AuthApi(Protocol):
    async def login(self, *, email: str, password: str) -> AuthPayload: ...

    async def register(self, *, name: str, email: str, password: str) -> AuthPayload: ...


class AuthContext:
    """Owns the current session and mirrors it into ``storage``.

    Only this object replaces the session; everything else reads it through
    :attr:`session` or :meth:`require_session`.
    """

    def __init__(self, api: AuthApi, storage: KeyValueStorage) -> None:
        self._api = api
        self._storage = storage
        self._session: AuthSession | None = None

    @property
    def session(self) -> AuthSession | None:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def require_session(self) -> AuthSession:
        if self._session is None:
            raise NotAuthenticatedError("Sign in to continue")
        return self._session

    def load(self) -> AuthSession | None:
        """Restore the stored session without touching the network."""

        token = self._storage.get(TOKEN_KEY)
        raw_user = self._storage.get(USER_KEY)
        if not token or not raw_user:
            self._session = None
            return None

        try:
            user = UserProfile.model_validate_json(raw_user)
        except ValidationError:
            logger.warning("Stored user could not be parsed; starting signed out")
            self._session = None
            return None

        self._session = AuthSession(token=token, user=user)
        return self._session

    async def login(self, *, email: str, password: str) -> AuthSession:
        payload = await self._api.login(email=email, password=password)
        return self._replace(payload)

    async def register(self, *, name: str, email: str, password: str) -> AuthSession:
        payload = await self._api.register(name=name, email=email, password=password)
        return self._replace(payload)

    def logout(self) -> None:
        self._storage.remove(TOKEN_KEY)
        self._storage.remove(USER_KEY)
        self._session = None
        logger.debug("Session cleared")

    def sync_favorites(self, favorites: list[str]) -> AuthSession | None:
        """Replace the user's favorites with the server's list.

        Returns ``None`` when nobody is signed in anymore; a response that
        arrives after logout must not resurrect the session.
        """

        if self._session is None:
            logger.debug("Dropping favorites sync for a closed session")
            return None

        self._session = self._session.with_favorites(favorites)
        try:
            self._storage.set(USER_KEY, self._session.user.model_dump_json())
        except OSError as exc:
            logger.warning("Failed to persist favorites: %s", exc)
        return self._session

    def _replace(self, payload: AuthPayload) -> AuthSession:
        session = AuthSession(token=payload.token, user=payload.user)
        self._storage.set(TOKEN_KEY, session.token)
        self._storage.set(USER_KEY, session.user.model_dump_json())
        self._session = session
        logger.info("Signed in as %s", session.user.email)
        return session
