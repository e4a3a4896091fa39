"""Unit of work interface - one atomic store transaction."""

from abc import ABC, abstractmethod
from typing import Callable

from .repositories import AccountRepository, LedgerRepository, LoanRepository


class UnitOfWork(ABC):
    """
    Groups the repositories touched by one operation into one transaction.

    Usage:
        async with uow_factory() as uow:
            account = await uow.accounts.get_by_id(1, for_update=True)
            ...

    Leaving the block normally commits; leaving it with an exception
    rolls everything back, so a failed operation leaves no trace.
    """

    accounts: AccountRepository
    ledger: LedgerRepository
    loans: LoanRepository

    async def __aenter__(self) -> "UnitOfWork":
        await self.begin()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self.close()

    @abstractmethod
    async def begin(self) -> None:
        """Open the transaction and bind the repositories."""
        ...

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...

    async def close(self) -> None:
        """Release the underlying connection (default no-op)."""
        pass


UnitOfWorkFactory = Callable[[], UnitOfWork]
