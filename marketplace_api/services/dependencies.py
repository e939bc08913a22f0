"""FastAPI dependency wiring for backend services.

Services stay free of web-layer concerns; this module resolves the database
session and settings, builds the repositories and hands back ready services.
``get_current_user_id`` is the bearer-token gate used by every route that
needs an identity.
"""

from __future__ import annotations

from datetime import timedelta

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.db.connection import get_db
from marketplace_api.db.repositories import ProductRepository, UserRepository
from marketplace_api.services.auth_service import AuthService
from marketplace_api.services.catalog_service import CatalogService
from marketplace_api.services.favorites_service import FavoritesService
from marketplace_api.services.security import TokenSigner
from marketplace_api.settings import AppSettings, get_settings

_BEARER_PREFIX = "bearer "


def get_token_signer(settings: AppSettings = Depends(get_settings)) -> TokenSigner:
    return TokenSigner(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(days=settings.token_ttl_days),
    )


def get_auth_service(
    session: AsyncSession = Depends(get_db),
    signer: TokenSigner = Depends(get_token_signer),
) -> AuthService:
    return AuthService(UserRepository(session), signer)


def get_catalog_service(
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_settings),
) -> CatalogService:
    return CatalogService(
        ProductRepository(session),
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


def get_favorites_service(
    session: AsyncSession = Depends(get_db),
) -> FavoritesService:
    return FavoritesService(UserRepository(session))


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""

    if not authorization:
        return None
    if not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX) :].strip()
    return token or None


def get_current_user_id(
    authorization: str | None = Header(default=None),
    auth: AuthService = Depends(get_auth_service),
) -> str:
    """Resolve the caller's user id or raise ``Unauthenticated``."""

    return auth.verify(extract_bearer_token(authorization))


__all__ = [
    "extract_bearer_token",
    "get_auth_service",
    "get_catalog_service",
    "get_current_user_id",
    "get_favorites_service",
    "get_token_signer",
]
