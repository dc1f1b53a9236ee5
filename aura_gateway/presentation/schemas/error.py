"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["INVALID_AURA_REQUEST"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["wallet must be 0x followed by 40 hex characters, got 'abc'"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "SNAPSHOT_NOT_FOUND",
                    "message": "Aura snapshot not found: 550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "abc123",
                }
            ]
        }
    }
