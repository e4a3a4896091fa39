"""SQLAlchemy implementation of AccountRepository."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Account, AccountRole
from src.domain.interfaces import AccountRepository
from src.infrastructure.database.models import AccountModel


class SqlAlchemyAccountRepository(AccountRepository):
    """
    SQLAlchemy implementation of the Account repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, account: Account) -> Account:
        """Persist a new account and populate its id."""
        model = AccountModel(
            username=account.username,
            role=account.role.value,
            balance_cents=account.balance_cents,
            credit_score=account.credit_score,
            created_at=account.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        account.id = model.id
        return account

    async def get_by_id(self, account_id: int, for_update: bool = False) -> Optional[Account]:
        """Retrieve an account by ID, optionally locking its row."""
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def get_by_username(self, username: str) -> Optional[Account]:
        stmt = select(AccountModel).where(AccountModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def list_all(self) -> List[Account]:
        stmt = select(AccountModel).order_by(AccountModel.username)
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def update(self, account: Account) -> Account:
        """Write back balance and credit score."""
        model = await self._session.get(AccountModel, account.id)

        if model is None:
            raise ValueError(f"Account {account.id} not found")

        model.balance_cents = account.balance_cents
        model.credit_score = account.credit_score

        await self._session.flush()

        return account

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(AccountModel.id)))
        return result.scalar_one()

    def _to_entity(self, model: AccountModel) -> Account:
        """Convert database model to domain entity."""
        return Account(
            id=model.id,
            username=model.username,
            role=AccountRole(model.role),
            balance_cents=model.balance_cents,
            credit_score=model.credit_score,
            created_at=model.created_at,
        )
