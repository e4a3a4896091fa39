"""Application services (use cases)."""

from .account_service import AccountService
from .ledger_service import LedgerService
from .loan_service import LoanService

__all__ = [
    "AccountService",
    "LedgerService",
    "LoanService",
]
