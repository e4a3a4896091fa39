"""Loan-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from src.core.config import MAX_STORED_INT


class LoanApplicationSchema(BaseModel):
    """Schema for POST /v1/loans request body."""

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"amount_cents": 10000}]}
    )

    amount_cents: int = Field(
        ...,
        gt=0,
        le=MAX_STORED_INT,
        description="Loan principal requested in cents",
        examples=[10000],
    )


class RepaymentSchema(BaseModel):
    """Schema for POST /v1/loans/{loan_id}/repay request body."""

    amount_cents: int = Field(
        ...,
        gt=0,
        le=MAX_STORED_INT,
        description="Amount to repay in cents",
        examples=[3000],
    )


class LoanSchema(BaseModel):
    """Schema for a loan."""

    loan_id: int = Field(..., description="Loan identifier")
    owner_id: int = Field(..., description="Borrowing account")
    principal_cents: int = Field(..., gt=0, description="Original amount borrowed")
    remaining_cents: int = Field(..., ge=0, description="Amount still owed")
    rate: int = Field(..., description="Nominal rate in percent (informational)")
    status: str = Field(
        ...,
        description="active, paid or defaulted",
        examples=["active"],
    )
    created_at: str = Field(..., description="ISO 8601 timestamp of origination")


class SweepResultSchema(BaseModel):
    """Schema for POST /v1/admin/autopay/run response body."""

    processed: int = Field(..., ge=0, description="Loans paid or missed in this sweep")
    paid: int = Field(..., ge=0, description="Scheduled payments collected")
    missed: int = Field(..., ge=0, description="Scheduled payments missed")
    skipped: int = Field(0, ge=0, description="Loans closed before their turn")
    errors: int = Field(0, ge=0, description="Loans left for the next sweep after an error")
