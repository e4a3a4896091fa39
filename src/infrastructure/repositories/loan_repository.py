"""SQLAlchemy repository implementation for loans."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Loan, LoanStatus
from src.domain.interfaces import LoanRepository
from src.infrastructure.database.models import LoanModel


class SqlAlchemyLoanRepository(LoanRepository):
    """SQLAlchemy-backed loan repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, loan: Loan) -> Loan:
        model = LoanModel(
            owner_id=loan.owner_id,
            principal_cents=loan.principal_cents,
            remaining_cents=loan.remaining_cents,
            rate=loan.rate,
            status=loan.status.value,
            created_at=loan.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        loan.id = model.id
        return loan

    async def get_by_id(self, loan_id: int, for_update: bool = False) -> Optional[Loan]:
        """Retrieve a loan by ID, optionally locking its row."""
        stmt = select(LoanModel).where(LoanModel.id == loan_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def get_by_owner(self, owner_id: int) -> List[Loan]:
        stmt = (
            select(LoanModel)
            .where(LoanModel.owner_id == owner_id)
            .order_by(LoanModel.id.desc())
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def get_active(self) -> List[Loan]:
        stmt = (
            select(LoanModel)
            .where(LoanModel.status == LoanStatus.ACTIVE.value)
            .order_by(LoanModel.id.asc())
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def update(self, loan: Loan) -> Loan:
        model = await self._session.get(LoanModel, loan.id)

        if model is None:
            raise ValueError(f"Loan {loan.id} not found")

        model.remaining_cents = loan.remaining_cents
        model.status = loan.status.value

        await self._session.flush()

        return loan

    def _to_entity(self, model: LoanModel) -> Loan:
        return Loan(
            id=model.id,
            owner_id=model.owner_id,
            principal_cents=model.principal_cents,
            remaining_cents=model.remaining_cents,
            rate=model.rate,
            status=LoanStatus(model.status),
            created_at=model.created_at,
        )
