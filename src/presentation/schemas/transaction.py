"""Transfer, fine and ledger history schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.config import MAX_STORED_INT

from .account import AccountSchema


class TransferRequestSchema(BaseModel):
    """Schema for POST /v1/transactions/transfer request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"recipient_id": 7, "amount_cents": 2500, "note": "Lunch money"},
            ]
        }
    )

    recipient_id: int = Field(
        ...,
        gt=0,
        le=MAX_STORED_INT,
        description="Account receiving the money",
    )
    amount_cents: int = Field(
        ...,
        gt=0,
        le=MAX_STORED_INT,
        description="Amount to transfer in cents",
        examples=[2500],
    )
    note: Optional[str] = Field(
        None,
        max_length=255,
        description="Free-text note, defaults to 'Money transfer'",
    )


class FineRequestSchema(BaseModel):
    """Schema for POST /v1/transactions/fine request body."""

    target_id: int = Field(
        ...,
        gt=0,
        le=MAX_STORED_INT,
        description="Account being fined",
    )
    amount_cents: int = Field(
        ...,
        gt=0,
        le=MAX_STORED_INT,
        description="Amount of the fine in cents",
        examples=[1500],
    )
    reason: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Reason recorded on the ledger entry",
        examples=["Late homework"],
    )

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("reason cannot be empty or whitespace")
        return v.strip()


class LedgerEntrySchema(BaseModel):
    """Schema for one ledger entry."""

    entry_id: int = Field(..., description="Ledger entry identifier")
    kind: str = Field(
        ...,
        description="transfer, fine, loan_disbursal or loan_repayment",
        examples=["transfer"],
    )
    amount_cents: int = Field(..., gt=0, description="Amount moved in cents")
    from_account_id: Optional[int] = Field(
        None,
        description="Paying account (null when the bank pays)",
    )
    to_account_id: Optional[int] = Field(
        None,
        description="Receiving account (null when the bank receives)",
    )
    note: Optional[str] = Field(None, description="Free-text note")
    created_at: str = Field(..., description="ISO 8601 timestamp of the entry")


class LedgerHistorySchema(BaseModel):
    """Schema for ledger history responses."""

    account_id: int = Field(..., description="Account the history belongs to")
    entries: list[LedgerEntrySchema] = Field(
        ...,
        description="Entries where the account pays or receives, newest first",
    )


class FineResponseSchema(BaseModel):
    """Schema for POST /v1/transactions/fine response body."""

    account: AccountSchema = Field(..., description="Fined account after the fine")
    amount_levied_cents: int = Field(..., gt=0, description="Fine as issued")
    amount_collected_cents: int = Field(
        ...,
        ge=0,
        description="Amount actually taken, capped at the balance",
    )
    entry: Optional[LedgerEntrySchema] = Field(
        None,
        description="Ledger entry (null when nothing could be collected)",
    )
