"""Domain exceptions raised by services and mapped onto HTTP responses.

Services raise these instead of ``HTTPException`` so they stay usable outside
FastAPI; ``marketplace_api.main`` translates each one into an
:class:`~marketplace_api.schemas.error.ErrorResponse` with the class's status.
"""

from __future__ import annotations

from fastapi import status

from marketplace_api.schemas.error import ErrorType


class MarketplaceError(Exception):
    """Base class for failures that are safe to report to the caller."""

    error_type: ErrorType = ErrorType.INTERNAL_ERROR
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(MarketplaceError):
    error_type = ErrorType.INVALID_INPUT
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "All fields required"


class DuplicateEmail(MarketplaceError):
    error_type = ErrorType.DUPLICATE_EMAIL
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class InvalidCredentials(MarketplaceError):
    """Raised for an unknown email and for a wrong password alike."""

    error_type = ErrorType.INVALID_CREDENTIALS
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class Unauthenticated(MarketplaceError):
    error_type = ErrorType.UNAUTHENTICATED
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class NotFound(MarketplaceError):
    error_type = ErrorType.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


__all__ = [
    "DuplicateEmail",
    "InvalidCredentials",
    "InvalidInput",
    "MarketplaceError",
    "NotFound",
    "Unauthenticated",
]
