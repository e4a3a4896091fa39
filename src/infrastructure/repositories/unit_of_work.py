"""SQLAlchemy implementation of UnitOfWork."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.interfaces import UnitOfWork

from .account_repository import SqlAlchemyAccountRepository
from .ledger_repository import SqlAlchemyLedgerRepository
from .loan_repository import SqlAlchemyLoanRepository


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    One AsyncSession per unit of work.

    The session's transaction starts with the first statement and ends
    with commit() or rollback() when the async with block exits.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker
        self._session: AsyncSession | None = None

    async def begin(self) -> None:
        self._session = self._sessionmaker()
        self.accounts = SqlAlchemyAccountRepository(self._session)
        self.ledger = SqlAlchemyLedgerRepository(self._session)
        self.loans = SqlAlchemyLoanRepository(self._session)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
