"""
Domain Interfaces (Ports)
"""

from .repositories import AccountRepository, LedgerRepository, LoanRepository
from .unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AccountRepository",
    "LedgerRepository",
    "LoanRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
