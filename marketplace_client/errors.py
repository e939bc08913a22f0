"""Exceptions raised by the marketplace client."""

from __future__ import annotations


class ApiError(Exception):
    """Non-2xx answer from the API.

    ``message`` is the server's user-facing message and ``error_type`` its
    machine-readable category (``duplicate_email``, ``not_found``, ...).
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error_type: str | None = None,
    ) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.error_type = error_type


class UnauthenticatedError(ApiError):
    """The token was missing, expired or rejected (HTTP 401)."""


class NotFoundError(ApiError):
    """The product or user no longer exists (HTTP 404)."""


class NotAuthenticatedError(RuntimeError):
    """An identity-requiring action was attempted without a session."""
