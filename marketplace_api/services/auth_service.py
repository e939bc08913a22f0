"""Registration, login and token verification."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from marketplace_api.db.repositories import UserRepository
from marketplace_api.errors import DuplicateEmail, InvalidCredentials, InvalidInput
from marketplace_api.schemas.auth import AuthResponse, UserPublic
from marketplace_api.services.security import TokenSigner, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Validates credentials and issues or verifies bearer tokens."""

    def __init__(self, users: UserRepository, signer: TokenSigner) -> None:
        self._users = users
        self._signer = signer

    async def register(self, *, name: str, email: str, password: str) -> AuthResponse:
        if not name.strip() or not email.strip() or not password:
            raise InvalidInput("All fields required")

        if await self._users.get_by_email(email) is not None:
            raise DuplicateEmail("User already exists")

        try:
            user = await self._users.create(
                name=name,
                email=email,
                password_hash=hash_password(password),
            )
        except IntegrityError as exc:
            # A concurrent registration won the unique index on email.
            raise DuplicateEmail("User already exists") from exc

        logger.info("Registered user %s", user.id)
        return AuthResponse(
            token=self._signer.issue(user.id),
            user=UserPublic.model_validate(user),
        )

    async def login(self, *, email: str, password: str) -> AuthResponse:
        """Authenticate ``email``/``password``.

        Unknown users and wrong passwords raise the same
        :class:`InvalidCredentials` so callers cannot probe for accounts.
        """

        if not email.strip() or not password:
            raise InvalidCredentials()

        user = await self._users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        return AuthResponse(
            token=self._signer.issue(user.id),
            user=UserPublic.model_validate(user),
        )

    def verify(self, token: str | None) -> str:
        """Return the user id bound to ``token`` or raise ``Unauthenticated``."""

        return self._signer.verify(token)
