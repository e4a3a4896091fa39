"""Account-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AccountSchema(BaseModel):
    """Schema for a full account view."""

    account_id: int = Field(..., description="Account identifier", examples=[5])
    username: str = Field(..., description="Unique display name", examples=["Lion12"])
    role: str = Field(..., description="standard or administrator", examples=["standard"])
    balance_cents: int = Field(
        ...,
        ge=0,
        description="Current balance in cents",
        examples=[100000],
    )
    credit_score: int = Field(
        ...,
        ge=300,
        le=850,
        description="Credit score (300-850)",
        examples=[650],
    )
    created_at: str = Field(..., description="ISO 8601 timestamp of account opening")


class AccountSummarySchema(BaseModel):
    """Schema for a directory entry; balance and score are not shown."""

    account_id: int = Field(..., description="Account identifier")
    username: str = Field(..., description="Unique display name")
    role: str = Field(..., description="standard or administrator")


class OpenAccountRequestSchema(BaseModel):
    """Schema for POST /v1/accounts request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"username": "Heron27", "role": "standard"},
            ]
        }
    )

    username: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Unique display name",
        examples=["Heron27"],
    )
    role: Literal["standard", "administrator"] = Field(
        "standard",
        description="Role of the new account",
    )

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Ensure username is not just whitespace."""
        if not v.strip():
            raise ValueError("username cannot be empty or whitespace")
        return v.strip()
