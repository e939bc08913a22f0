"""Error response schemas shared by every exception handler."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Categories of failure surfaced to API clients."""

    INVALID_INPUT = "invalid_input"
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    DATABASE_ERROR = "database_error"
    INTERNAL_ERROR = "internal_error"


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "duplicate_email",
                "message": "User already exists",
                "detail": None,
                "status_code": 400,
                "timestamp": "2025-11-03T10:30:00Z",
                "request_id": "6f1c2a4e-2d5b-4b8e-9a57-0d3e1f7c9b10",
                "path": "/auth/register",
            }
        }
    )

    error_type: ErrorType = Field(..., description="Category of error")
    message: str = Field(..., description="Short, user-facing error message")
    detail: str | None = Field(None, description="Additional context, never internal state")
    status_code: int = Field(..., description="HTTP status code")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the error occurred",
    )
    request_id: str | None = Field(None, description="Request identifier for log correlation")
    path: str | None = Field(None, description="Request path that caused the error")


class ValidationErrorDetail(BaseModel):
    """Details for a single invalid request field."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Any = Field(None, description="Value that failed validation")


class ValidationErrorResponse(ErrorResponse):
    """Error response carrying per-field validation failures."""

    error_type: ErrorType = Field(default=ErrorType.INVALID_INPUT)
    errors: list[ValidationErrorDetail] = Field(
        default_factory=list, description="List of validation errors"
    )
