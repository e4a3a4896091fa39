"""Pydantic schema for API error responses."""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["INSUFFICIENT_FUNDS"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Insufficient funds"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )
    max_amount_cents: Optional[int] = Field(
        None,
        description="Largest loan the caller may take (loan denials only)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "LOAN_DENIED",
                    "message": "Based on your credit score, the maximum loan you can take is $200.00.",
                    "request_id": "abc123",
                    "max_amount_cents": 20000,
                }
            ]
        }
    }
