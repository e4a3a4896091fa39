"""Dependency injection for FastAPI."""

from functools import partial
from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from src.application.scheduler import AutoRepayScheduler
from src.application.services import AccountService, LedgerService, LoanService
from src.core.config import MAX_STORED_INT, settings
from src.domain.exceptions import UnauthenticatedException
from src.domain.interfaces import UnitOfWorkFactory
from src.infrastructure.database import db_manager
from src.infrastructure.locks import AccountLockRegistry
from src.infrastructure.repositories import SqlAlchemyUnitOfWork
from src.service.rules import BankingRulesSettings, get_rules_settings

# Shared by every request in this process
account_locks = AccountLockRegistry()


# Infrastructure dependencies
def get_unit_of_work_factory() -> UnitOfWorkFactory:
    """Get a factory producing one SQLAlchemy unit of work per call."""
    return partial(SqlAlchemyUnitOfWork, db_manager.sessionmaker)


def get_account_locks() -> AccountLockRegistry:
    return account_locks


def get_banking_rules() -> BankingRulesSettings:
    return get_rules_settings()


# Caller identity
def get_caller_id(
    x_account_id: Annotated[Optional[str], Header(alias="X-Account-ID")] = None,
) -> int:
    """
    Resolve the calling account from the X-Account-ID header.

    Raises:
        UnauthenticatedException: Header missing or not a positive integer
            within the id range
    """
    if x_account_id is None or not x_account_id.strip():
        raise UnauthenticatedException("X-Account-ID header is required")

    try:
        caller_id = int(x_account_id)
    except ValueError:
        raise UnauthenticatedException("X-Account-ID must be an integer account id")

    if not 0 < caller_id <= MAX_STORED_INT:
        raise UnauthenticatedException("X-Account-ID must be an integer account id")

    return caller_id


# Service dependencies
def get_account_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_unit_of_work_factory)],
    locks: Annotated[AccountLockRegistry, Depends(get_account_locks)],
    rules: Annotated[BankingRulesSettings, Depends(get_banking_rules)],
) -> AccountService:
    """Get an AccountService instance with all dependencies."""
    return AccountService(uow_factory=uow_factory, locks=locks, settings=rules)


def get_loan_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_unit_of_work_factory)],
    locks: Annotated[AccountLockRegistry, Depends(get_account_locks)],
    rules: Annotated[BankingRulesSettings, Depends(get_banking_rules)],
) -> LoanService:
    """Get a LoanService instance with all dependencies."""
    return LoanService(uow_factory=uow_factory, locks=locks, settings=rules)


def get_ledger_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_unit_of_work_factory)],
) -> LedgerService:
    """Get a LedgerService instance."""
    return LedgerService(uow_factory=uow_factory)


def get_autopay_scheduler(
    request: Request,
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> AutoRepayScheduler:
    """
    Get the scheduler started by the application lifespan.

    Falls back to an unstarted scheduler over the request's loan service
    when the lifespan did not run.
    """
    scheduler = getattr(request.app.state, "autopay_scheduler", None)
    if scheduler is not None:
        return scheduler
    return AutoRepayScheduler(
        sweep=loan_service.auto_repay_sweep,
        interval_seconds=settings.autopay_interval_seconds,
    )
