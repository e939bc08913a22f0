"""Builders for the structured error bodies returned by the API.

Every exception handler goes through these helpers so the request id and a
timezone-aware timestamp are attached in exactly one place.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from marketplace_api.errors import MarketplaceError
from marketplace_api.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from marketplace_api.utils.request_context import get_request_id

__all__ = [
    "build_domain_error_response",
    "build_error_response",
    "build_validation_error_response",
]


def _current_timestamp() -> datetime:
    """Return the timestamp stamped on error payloads (patched in tests)."""

    return datetime.now(UTC)


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    status_code: int,
    path: str,
    detail: str | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    """Construct an ``ErrorResponse`` enriched with request metadata."""

    return ErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id(),
        path=path,
    )


def build_domain_error_response(
    exc: MarketplaceError,
    *,
    path: str,
    request_id: str | None = None,
) -> ErrorResponse:
    """Translate a :class:`MarketplaceError` into its response body."""

    return build_error_response(
        error_type=exc.error_type,
        message=exc.message,
        status_code=exc.status_code,
        path=path,
        request_id=request_id,
    )


def build_validation_error_response(
    *,
    errors: Sequence[ValidationErrorDetail],
    message: str,
    detail: str,
    status_code: int,
    path: str,
    request_id: str | None = None,
) -> ValidationErrorResponse:
    """Construct a ``ValidationErrorResponse``; ``errors`` is copied eagerly."""

    return ValidationErrorResponse(
        error_type=ErrorType.INVALID_INPUT,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id(),
        path=path,
        errors=list(errors),
    )
