"""Account service - money movement between accounts and account inspection."""

from typing import List

import structlog

from src.application.dto import (
    AccountResponse,
    AccountSummary,
    FineRequest,
    FineResponse,
    LedgerEntryResponse,
    OpenAccountRequest,
    TransferRequest,
)
from src.core.metrics import record_fine, record_transfer
from src.domain.entities import Account, AccountRole, LedgerEntry
from src.domain.exceptions import (
    AccountNotFoundException,
    ForbiddenOperationException,
    InsufficientFundsException,
    InvalidInputException,
)
from src.domain.interfaces import UnitOfWork, UnitOfWorkFactory
from src.infrastructure.locks import AccountLockRegistry
from src.service.rules import (
    BankingRulesSettings,
    clamp_credit_score,
    rules_settings,
    score_after_fine,
)

logger = structlog.get_logger(__name__)

DEFAULT_TRANSFER_NOTE = "Money transfer"


async def require_account(
    uow: UnitOfWork,
    account_id: int,
    for_update: bool = False,
) -> Account:
    """Load an account or raise AccountNotFoundException."""
    account = await uow.accounts.get_by_id(account_id, for_update=for_update)
    if account is None:
        raise AccountNotFoundException(account_id)
    return account


async def require_admin(uow: UnitOfWork, account_id: int, action: str) -> Account:
    """Load the caller and make sure it is an administrator."""
    caller = await require_account(uow, account_id)
    if not caller.is_admin:
        raise ForbiddenOperationException(f"Only administrators can {action}")
    return caller


class AccountService:
    """
    Application service for account use cases.

    Every money movement runs inside one unit of work while holding the
    locks of the accounts involved: validate, mutate balances and scores,
    append the ledger entry, commit. A raised exception rolls all of it
    back.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        locks: AccountLockRegistry,
        settings: BankingRulesSettings = rules_settings,
    ):
        self._uow_factory = uow_factory
        self._locks = locks
        self._settings = settings

    async def transfer(self, request: TransferRequest) -> LedgerEntryResponse:
        """
        Move money from the sender to the recipient.

        Args:
            request: Sender, recipient, amount and optional note

        Returns:
            The ledger entry recording the transfer

        Raises:
            InvalidInputException: Non-positive amount or self-transfer
            AccountNotFoundException: Sender or recipient missing
            InsufficientFundsException: Sender balance below the amount
        """
        errors = request.validate()
        if errors:
            raise InvalidInputException("; ".join(errors))

        log = logger.bind(
            sender_id=request.sender_id,
            recipient_id=request.recipient_id,
            amount=request.amount_cents,
        )
        log.info("transfer_requested")

        async with self._locks.hold(request.sender_id, request.recipient_id):
            async with self._uow_factory() as uow:
                # Row locks are taken in id order, like the in-process locks
                loaded = {}
                for account_id in sorted((request.sender_id, request.recipient_id)):
                    loaded[account_id] = await require_account(
                        uow, account_id, for_update=True
                    )
                sender = loaded[request.sender_id]
                recipient = loaded[request.recipient_id]

                if not sender.can_afford(request.amount_cents):
                    log.info("transfer_rejected", reason="insufficient_funds")
                    raise InsufficientFundsException(
                        sender.id, sender.balance_cents, request.amount_cents
                    )

                sender.balance_cents -= request.amount_cents
                recipient.balance_cents += request.amount_cents
                await uow.accounts.update(sender)
                await uow.accounts.update(recipient)

                entry = await uow.ledger.append(
                    LedgerEntry.transfer(
                        sender_id=sender.id,
                        recipient_id=recipient.id,
                        amount_cents=request.amount_cents,
                        note=request.note or DEFAULT_TRANSFER_NOTE,
                    )
                )

        record_transfer(request.amount_cents)
        log.info("transfer_completed", entry_id=entry.id)

        return LedgerEntryResponse.from_entity(entry)

    async def issue_fine(self, request: FineRequest) -> FineResponse:
        """
        Fine an account on behalf of an administrator.

        The fine is capped at the target's balance so the balance never
        goes negative. The credit-score penalty applies in full even when
        nothing can be collected; in that case no money moves and no
        ledger entry is written.

        Raises:
            InvalidInputException: Non-positive amount or empty reason
            AccountNotFoundException: Caller or target missing
            ForbiddenOperationException: Caller is not an administrator
        """
        errors = request.validate()
        if errors:
            raise InvalidInputException("; ".join(errors))

        log = logger.bind(
            admin_id=request.admin_id,
            target_id=request.target_id,
            amount=request.amount_cents,
        )

        async with self._locks.hold(request.target_id):
            async with self._uow_factory() as uow:
                await require_admin(uow, request.admin_id, "issue fines")
                target = await require_account(uow, request.target_id, for_update=True)

                collected = min(request.amount_cents, target.balance_cents)
                score_before = target.credit_score

                target.balance_cents -= collected
                target.credit_score = score_after_fine(target.credit_score, self._settings)
                await uow.accounts.update(target)

                entry = None
                if collected > 0:
                    entry = await uow.ledger.append(
                        LedgerEntry.fine(
                            target_id=target.id,
                            amount_cents=collected,
                            note=self._fine_note(request, collected),
                        )
                    )

        record_fine(request.amount_cents, collected)
        log.info(
            "fine_issued",
            collected=collected,
            score_before=score_before,
            score_after=target.credit_score,
            entry_id=entry.id if entry else None,
        )

        return FineResponse(
            account=AccountResponse.from_entity(target),
            amount_levied_cents=request.amount_cents,
            amount_collected_cents=collected,
            entry=LedgerEntryResponse.from_entity(entry) if entry else None,
        )

    async def open_account(self, request: OpenAccountRequest) -> AccountResponse:
        """
        Provision a new account with the opening balance and score for its role.

        Raises:
            InvalidInputException: Empty or already taken username
            ForbiddenOperationException: Caller is not an administrator
        """
        errors = request.validate()
        if errors:
            raise InvalidInputException("; ".join(errors))

        username = request.username.strip()

        async with self._uow_factory() as uow:
            await require_admin(uow, request.admin_id, "open accounts")

            if await uow.accounts.get_by_username(username) is not None:
                raise InvalidInputException(f"Username already taken: {username}")

            account = await uow.accounts.add(
                self.new_account(username, request.role, self._settings)
            )

        logger.info(
            "account_opened",
            admin_id=request.admin_id,
            account_id=account.id,
            role=account.role.value,
        )

        return AccountResponse.from_entity(account)

    async def get_account(self, caller_id: int, account_id: int) -> AccountResponse:
        """
        Retrieve an account visible to the caller.

        Callers see their own account; administrators see every account.
        """
        async with self._uow_factory() as uow:
            caller = await require_account(uow, caller_id)
            if caller.id != account_id and not caller.is_admin:
                raise ForbiddenOperationException("You can only view your own account")
            account = await require_account(uow, account_id)

        return AccountResponse.from_entity(account)

    async def authorize_admin(self, caller_id: int, action: str) -> AccountResponse:
        """
        Confirm the caller is an administrator.

        Raises:
            AccountNotFoundException: Caller missing
            ForbiddenOperationException: Caller is a standard account
        """
        async with self._uow_factory() as uow:
            caller = await require_admin(uow, caller_id, action)

        return AccountResponse.from_entity(caller)

    async def list_accounts(self, caller_id: int) -> List[AccountResponse]:
        """Retrieve every account with balances and scores (administrators only)."""
        async with self._uow_factory() as uow:
            await require_admin(uow, caller_id, "inspect all accounts")
            accounts = await uow.accounts.list_all()

        logger.info("accounts_listed", caller_id=caller_id, count=len(accounts))

        return [AccountResponse.from_entity(a) for a in accounts]

    async def get_directory(self, caller_id: int) -> List[AccountSummary]:
        """Retrieve the names of all accounts, for picking transfer recipients."""
        async with self._uow_factory() as uow:
            await require_account(uow, caller_id)
            accounts = await uow.accounts.list_all()

        return [AccountSummary.from_entity(a) for a in accounts]

    @staticmethod
    def new_account(
        username: str,
        role: AccountRole,
        settings: BankingRulesSettings = rules_settings,
    ) -> Account:
        """Build an unsaved account with the opening values for its role."""
        if role == AccountRole.ADMINISTRATOR:
            return Account(
                username=username,
                role=role,
                balance_cents=settings.admin_opening_balance_cents,
                credit_score=clamp_credit_score(settings.admin_opening_credit_score, settings),
            )
        return Account(
            username=username,
            role=role,
            balance_cents=settings.standard_opening_balance_cents,
            credit_score=clamp_credit_score(settings.standard_opening_credit_score, settings),
        )

    def _fine_note(self, request: FineRequest, collected: int) -> str:
        reason = request.reason.strip()
        if collected == request.amount_cents:
            return reason
        return (
            f"{reason} (levied ${request.amount_cents / 100:,.2f}, "
            f"collected ${collected / 100:,.2f})"
        )
