"""Data Transfer Objects for application layer."""

from .account import (
    TransferRequest,
    FineRequest,
    OpenAccountRequest,
    AccountResponse,
    AccountSummary,
    FineResponse,
)
from .ledger import LedgerEntryResponse, LedgerHistoryResponse
from .loan import LoanApplicationRequest, RepaymentRequest, LoanResponse, SweepResult

__all__ = [
    "TransferRequest",
    "FineRequest",
    "OpenAccountRequest",
    "AccountResponse",
    "AccountSummary",
    "FineResponse",
    "LedgerEntryResponse",
    "LedgerHistoryResponse",
    "LoanApplicationRequest",
    "RepaymentRequest",
    "LoanResponse",
    "SweepResult",
]
