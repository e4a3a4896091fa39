"""Pydantic schemas for API request/response validation."""

from .account import AccountSchema, AccountSummarySchema, OpenAccountRequestSchema
from .transaction import (
    TransferRequestSchema,
    FineRequestSchema,
    FineResponseSchema,
    LedgerEntrySchema,
    LedgerHistorySchema,
)
from .loan import (
    LoanApplicationSchema,
    RepaymentSchema,
    LoanSchema,
    SweepResultSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "AccountSchema",
    "AccountSummarySchema",
    "OpenAccountRequestSchema",
    "TransferRequestSchema",
    "FineRequestSchema",
    "FineResponseSchema",
    "LedgerEntrySchema",
    "LedgerHistorySchema",
    "LoanApplicationSchema",
    "RepaymentSchema",
    "LoanSchema",
    "SweepResultSchema",
    "ErrorResponseSchema",
]
