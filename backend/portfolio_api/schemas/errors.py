# backend/portfolio_api/schemas/errors.py
"""
Pydantic schemas for error responses.

Every error the API returns has the same envelope:

    {"error": "PortfolioNotFoundError", "message": "...", "details": {...}}

Built by the global exception handlers in main.py and referenced in route
`responses=` so the OpenAPI docs show it.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Standard error envelope (400, 404, 500)."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "PortfolioNotFoundError",
                "message": "Portfolio 42 not found",
                "details": {"portfolio_id": 42},
            }
        }
    )

    error: str = Field(..., description="Exception class or HTTP error name")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Structured context, e.g. the missing portfolio's ID"
    )


class FieldError(BaseModel):
    """One failed request field, e.g. query.startDate."""

    field: str = Field(..., description="Dotted location, e.g. 'query.startDate'")
    message: str
    type: str = Field(..., description="Pydantic error type, e.g. 'date_from_datetime_parsing'")


class ValidationErrorDetail(BaseModel):
    """Envelope for request validation failures (422)."""

    error: str = Field(default="ValidationError")
    message: str = Field(default="Request validation failed")
    details: list[FieldError]


def internal_server_error() -> ErrorDetail:
    """Body for unexpected failures; internals stay in the logs."""
    return ErrorDetail(
        error="InternalServerError",
        message="An unexpected error occurred.",
    )
