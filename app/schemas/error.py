"""Standardized error response schema."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error body for every 400 and 500 response."""

    message: str = Field(..., description="Human-readable, sanitized error message")
    code: str = Field(..., description="Machine-readable error code")
