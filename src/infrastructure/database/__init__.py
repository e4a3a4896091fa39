"""Database infrastructure."""

from .connection import DatabaseSessionManager, db_manager
from .models import Base, AccountModel, LedgerEntryModel, LoanModel

__all__ = [
    "DatabaseSessionManager",
    "db_manager",
    "Base",
    "AccountModel",
    "LedgerEntryModel",
    "LoanModel",
]
