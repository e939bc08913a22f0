"""Base repository utilities shared across repository implementations."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

_LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``value`` matches literally.

    Examples:
        '50%' -> '50\\%'
        'a_b' -> 'a\\_b'
    """

    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )


class BaseRepository:
    """Base repository holding the request-scoped session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
