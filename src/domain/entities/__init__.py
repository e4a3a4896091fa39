"""Domain Entities - Core business objects."""

from .account import Account, AccountRole
from .ledger import LedgerEntry, LedgerEntryKind
from .loan import Loan, LoanStatus

__all__ = [
    "Account",
    "AccountRole",
    "LedgerEntry",
    "LedgerEntryKind",
    "Loan",
    "LoanStatus",
]
