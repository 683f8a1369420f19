"""Error payloads returned by the favorites API exception handlers."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Categories surfaced to API clients."""

    VALIDATION_ERROR = "validation_error"
    INVALID_REFERENCE = "invalid_reference"
    NOT_FOUND = "not_found"
    DATABASE_ERROR = "database_error"
    INTERNAL_ERROR = "internal_error"
    AUTHENTICATION_ERROR = "authentication_error"


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "database_error",
                "message": "Favorites store unavailable",
                "detail": "Unable to persist favorites. Please try again later.",
                "status_code": 503,
                "timestamp": "2026-03-14T10:30:00Z",
                "request_id": "6c8a1f0e-2d52-4f3b-9d0e-0b7f2d1e4c55",
                "path": "/favorites",
                "retry_after": 5,
            }
        }
    )

    error_type: ErrorType = Field(..., description="Category of error")
    message: str = Field(..., description="Human-readable error message")
    detail: str | None = Field(None, description="Additional error details or context")
    status_code: int = Field(..., description="HTTP status code")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="When error occurred"
    )
    request_id: str | None = Field(None, description="Unique request identifier for tracking")
    path: str | None = Field(None, description="Request path that caused the error")
    retry_after: int | None = Field(
        None, description="Seconds to wait before retrying (for transient store failures)"
    )


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Any = Field(None, description="Value that failed validation")


class ValidationErrorResponse(ErrorResponse):
    """Extended error response for validation errors."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "validation_error",
                "message": "Request validation failed",
                "detail": "1 validation error(s)",
                "status_code": 422,
                "timestamp": "2026-03-14T10:30:00Z",
                "request_id": "6c8a1f0e-2d52-4f3b-9d0e-0b7f2d1e4c55",
                "path": "/favorites",
                "errors": [
                    {
                        "field": "body.campsite_ids.0",
                        "message": "Value error, 'bogus-id' is not a valid campsite identifier",
                        "value": "bogus-id",
                    },
                ],
            }
        }
    )

    error_type: ErrorType = Field(default=ErrorType.VALIDATION_ERROR)
    errors: list[ValidationErrorDetail] = Field(
        default_factory=list, description="List of validation errors"
    )
