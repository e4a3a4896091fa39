"""Repository implementations."""

from .account_repository import SqlAlchemyAccountRepository
from .ledger_repository import SqlAlchemyLedgerRepository
from .loan_repository import SqlAlchemyLoanRepository
from .unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyLedgerRepository",
    "SqlAlchemyLoanRepository",
    "SqlAlchemyUnitOfWork",
]
