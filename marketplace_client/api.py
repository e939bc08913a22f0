"""Async HTTP client for the marketplace API.

Every identity-requiring call takes the caller's :class:`AuthSession`
explicitly; the client itself holds no credentials.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from .errors import ApiError, NotFoundError, UnauthenticatedError
from .models import AuthPayload, FavoritesPayload, Product, ProductPage
from .settings import ClientSettings

if TYPE_CHECKING:
    from .session import AuthSession

logger = logging.getLogger(__name__)


def _error_from_response(response: httpx.Response) -> ApiError:
    message = response.reason_phrase or "Request failed"
    error_type: str | None = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or message
        error_type = body.get("error_type")

    if response.status_code == 401:
        return UnauthenticatedError(response.status_code, message, error_type)
    if response.status_code == 404:
        return NotFoundError(response.status_code, message, error_type)
    return ApiError(response.status_code, message, error_type)


class ApiClient:
    """Thin typed wrapper around :class:`httpx.AsyncClient`."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> ApiClient:
        http = httpx.AsyncClient(
            base_url=settings.api_url,
            timeout=settings.request_timeout_seconds,
        )
        return cls(http)

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def register(self, *, name: str, email: str, password: str) -> AuthPayload:
        body = await self._request(
            "POST",
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        return AuthPayload.model_validate(body)

    async def login(self, *, email: str, password: str) -> AuthPayload:
        body = await self._request(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
        )
        return AuthPayload.model_validate(body)

    async def list_products(
        self,
        *,
        page: int = 1,
        limit: int | None = None,
        search: str | None = None,
    ) -> ProductPage:
        params: dict[str, Any] = {"page": page}
        if limit is not None:
            params["limit"] = limit
        if search:
            params["search"] = search
        body = await self._request("GET", "/products", params=params)
        return ProductPage.model_validate(body)

    async def get_product(self, product_id: str) -> Product:
        body = await self._request("GET", f"/products/{product_id}")
        return Product.model_validate(body)

    async def add_favorite(self, session: AuthSession, product_id: str) -> list[str]:
        body = await self._request(
            "POST",
            f"/products/{product_id}/favorite",
            session=session,
        )
        return FavoritesPayload.model_validate(body).favorites

    async def remove_favorite(self, session: AuthSession, product_id: str) -> list[str]:
        body = await self._request(
            "DELETE",
            f"/products/{product_id}/favorite",
            session=session,
        )
        return FavoritesPayload.model_validate(body).favorites

    async def _request(
        self,
        method: str,
        url: str,
        *,
        session: AuthSession | None = None,
        **kwargs: Any,
    ) -> Any:
        headers = {}
        if session is not None:
            headers["Authorization"] = f"Bearer {session.token}"

        response = await self._http.request(method, url, headers=headers, **kwargs)
        if response.is_error:
            error = _error_from_response(response)
            logger.debug("%s %s failed: %s", method, url, error)
            raise error
        return response.json()
