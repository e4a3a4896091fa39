"""SQLAlchemy implementation of the append-only LedgerRepository."""

from typing import List

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import LedgerEntry, LedgerEntryKind
from src.domain.interfaces import LedgerRepository
from src.infrastructure.database.models import LedgerEntryModel


class SqlAlchemyLedgerRepository(LedgerRepository):
    """SQLAlchemy-backed ledger. Only inserts and reads."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def append(self, entry: LedgerEntry) -> LedgerEntry:
        model = LedgerEntryModel(
            from_account_id=entry.from_account_id,
            to_account_id=entry.to_account_id,
            amount_cents=entry.amount_cents,
            kind=entry.kind.value,
            note=entry.note,
            created_at=entry.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return self._to_entity(model)

    async def get_for_account(
        self,
        account_id: int,
        limit: int = 50,
        offset: int = 0,
    ) -> List[LedgerEntry]:
        """Retrieve entries touching the account, newest first."""
        stmt = (
            select(LedgerEntryModel)
            .where(
                or_(
                    LedgerEntryModel.from_account_id == account_id,
                    LedgerEntryModel.to_account_id == account_id,
                )
            )
            .order_by(LedgerEntryModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: LedgerEntryModel) -> LedgerEntry:
        return LedgerEntry(
            id=model.id,
            kind=LedgerEntryKind(model.kind),
            amount_cents=model.amount_cents,
            from_account_id=model.from_account_id,
            to_account_id=model.to_account_id,
            note=model.note,
            created_at=model.created_at,
        )
