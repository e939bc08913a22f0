"""Password hashing and stateless session tokens.

Tokens are HS256 JWTs whose ``sub`` claim is the user id. Nothing is persisted
server-side: a token is valid exactly when its signature checks out and its
``exp`` claim lies in the future.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from marketplace_api.errors import Unauthenticated

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Return a salted hash of ``password`` suitable for storage."""

    return generate_password_hash(password)


def verify_password(password: str, stored_hash: str) -> bool:
    """Compare ``password`` against a hash produced by :func:`hash_password`."""

    if not stored_hash:
        return False
    return check_password_hash(stored_hash, password)


class TokenSigner:
    """Issue and verify session tokens bound to a user id."""

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue(self, user_id: str) -> str:
        issued_at = self._clock()
        payload = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str | None) -> str:
        """Return the user id carried by ``token``.

        Raises:
            Unauthenticated: when the token is missing, malformed, expired or
                signed with another key.
        """

        if not token:
            raise Unauthenticated("Not authorized, no token")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise Unauthenticated("Not authorized, token expired") from exc
        except jwt.PyJWTError as exc:
            logger.debug("Rejected session token: %s", exc)
            raise Unauthenticated("Not authorized, token failed") from exc

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise Unauthenticated("Not authorized, token failed")
        return user_id


__all__ = ["TokenSigner", "hash_password", "verify_password"]
