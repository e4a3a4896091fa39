"""Ledger service - handles ledger history retrieval."""

from typing import Optional

import structlog

from src.application.dto import LedgerHistoryResponse
from src.domain.exceptions import ForbiddenOperationException
from src.domain.interfaces import UnitOfWorkFactory

from .account_service import require_account

logger = structlog.get_logger(__name__)


class LedgerService:
    """
    Application service for ledger history use cases.

    The ledger is read-only from here; entries are only ever appended
    by the account and loan services as part of a money movement.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def get_history(
        self,
        caller_id: int,
        account_id: Optional[int] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> LedgerHistoryResponse:
        """
        Retrieve the ledger history of an account.

        Args:
            caller_id: The caller's account id
            account_id: Account to read, defaults to the caller's own
            limit: Maximum number of entries to return
            offset: Number of entries to skip

        Returns:
            LedgerHistoryResponse with entries, newest first

        Raises:
            AccountNotFoundException: Caller or account missing
            ForbiddenOperationException: A non-administrator asked for
                someone else's history
        """
        account_id = caller_id if account_id is None else account_id

        async with self._uow_factory() as uow:
            caller = await require_account(uow, caller_id)
            if account_id != caller.id:
                if not caller.is_admin:
                    raise ForbiddenOperationException(
                        "You can only view your own transactions"
                    )
                await require_account(uow, account_id)

            entries = await uow.ledger.get_for_account(
                account_id, limit=limit, offset=offset
            )

        logger.info(
            "ledger_history_retrieved",
            caller_id=caller_id,
            account_id=account_id,
            count=len(entries),
        )

        return LedgerHistoryResponse.from_entities(account_id, entries)
