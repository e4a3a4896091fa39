"""Loan service - origination, repayment and the auto-pay sweep."""

from typing import List, Optional

import structlog

from src.application.dto import (
    LoanApplicationRequest,
    LoanResponse,
    RepaymentRequest,
    SweepResult,
)
from src.core.metrics import (
    record_autopay_outcome,
    record_autopay_sweep,
    record_loan_application,
    record_loan_repayment,
    track_autopay_sweep_latency,
)
from src.domain.entities import LedgerEntry, Loan
from src.domain.exceptions import (
    InsufficientFundsException,
    InvalidInputException,
    LoanDeniedException,
    LoanNotFoundException,
)
from src.domain.interfaces import UnitOfWorkFactory
from src.infrastructure.locks import AccountLockRegistry
from src.service.rules import (
    BankingRulesSettings,
    autopay_amount_cents,
    autopay_note,
    is_extra_payment,
    max_loan_cents,
    repayment_note,
    rules_settings,
    score_after_autopay,
    score_after_repayment,
)

from .account_service import require_account

logger = structlog.get_logger(__name__)

AUTOPAY_PAID = "paid"
AUTOPAY_MISSED = "missed"


class LoanService:
    """
    Application service for loan use cases.

    Repayments feed back into the credit score, which in turn sets the
    ceiling for the next application.
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

    async def apply_for_loan(self, request: LoanApplicationRequest) -> LoanResponse:
        """
        Originate a loan and disburse it to the applicant.

        Args:
            request: Applicant and amount

        Returns:
            LoanResponse for the new, active loan

        Raises:
            InvalidInputException: Non-positive amount
            AccountNotFoundException: Applicant missing
            LoanDeniedException: Amount above the ceiling for the
                applicant's credit score
        """
        errors = request.validate()
        if errors:
            raise InvalidInputException("; ".join(errors))

        log = logger.bind(
            account_id=request.account_id,
            amount_requested=request.amount_cents,
        )
        log.info("loan_requested")

        async with self._locks.hold(request.account_id):
            async with self._uow_factory() as uow:
                account = await require_account(uow, request.account_id, for_update=True)

                ceiling = max_loan_cents(account.credit_score, self._settings)
                if request.amount_cents > ceiling:
                    record_loan_application(approved=False)
                    log.info(
                        "loan_denied",
                        credit_score=account.credit_score,
                        max_amount=ceiling,
                    )
                    raise LoanDeniedException(ceiling)

                loan = await uow.loans.add(
                    Loan(
                        owner_id=account.id,
                        principal_cents=request.amount_cents,
                        remaining_cents=request.amount_cents,
                        rate=self._settings.loan_rate_pct,
                    )
                )

                account.balance_cents += request.amount_cents
                await uow.accounts.update(account)

                await uow.ledger.append(
                    LedgerEntry.loan_disbursal(
                        account_id=account.id,
                        amount_cents=request.amount_cents,
                        note=f"Loan #{loan.id} approved",
                    )
                )

        record_loan_application(approved=True)
        log.info("loan_approved", loan_id=loan.id, credit_score=account.credit_score)

        return LoanResponse.from_entity(loan)

    async def repay_loan(self, request: RepaymentRequest) -> LoanResponse:
        """
        Apply a manual repayment to one of the caller's loans.

        The full amount is debited even if it exceeds what is owed; the
        outstanding balance floors at zero. A payment of at least the
        extra-payment threshold earns the larger score reward.

        Raises:
            InvalidInputException: Non-positive amount or loan already closed
            LoanNotFoundException: Loan missing or owned by someone else
            InsufficientFundsException: Balance below the amount
        """
        errors = request.validate()
        if errors:
            raise InvalidInputException("; ".join(errors))

        log = logger.bind(
            account_id=request.account_id,
            loan_id=request.loan_id,
            amount=request.amount_cents,
        )

        async with self._locks.hold(request.account_id):
            async with self._uow_factory() as uow:
                # Owner row before loan row
                account = await require_account(uow, request.account_id, for_update=True)

                loan = await uow.loans.get_by_id(request.loan_id, for_update=True)
                if loan is None or loan.owner_id != request.account_id:
                    raise LoanNotFoundException(request.loan_id)

                if not loan.is_active:
                    raise InvalidInputException(
                        f"Loan #{loan.id} is already {loan.status.value}"
                    )

                if not account.can_afford(request.amount_cents):
                    log.info("repayment_rejected", reason="insufficient_funds")
                    raise InsufficientFundsException(
                        account.id, account.balance_cents, request.amount_cents
                    )

                extra = is_extra_payment(
                    request.amount_cents, loan.principal_cents, self._settings
                )

                loan.apply_payment(request.amount_cents)
                account.balance_cents -= request.amount_cents
                account.credit_score = score_after_repayment(
                    account.credit_score, extra, self._settings
                )
                await uow.loans.update(loan)
                await uow.accounts.update(account)

                await uow.ledger.append(
                    LedgerEntry.loan_repayment(
                        account_id=account.id,
                        amount_cents=request.amount_cents,
                        note=repayment_note(loan.id, extra),
                    )
                )

        record_loan_repayment("extra" if extra else "standard", paid_off=not loan.is_active)
        log.info(
            "loan_repaid",
            extra=extra,
            remaining=loan.remaining_cents,
            status=loan.status.value,
            credit_score=account.credit_score,
        )

        return LoanResponse.from_entity(loan)

    async def list_loans(self, account_id: int) -> List[LoanResponse]:
        """Retrieve the caller's loans, newest first."""
        async with self._uow_factory() as uow:
            await require_account(uow, account_id)
            loans = await uow.loans.get_by_owner(account_id)

        return [LoanResponse.from_entity(loan) for loan in loans]

    async def auto_repay_sweep(self) -> SweepResult:
        """
        Collect the scheduled payment on every active loan.

        Each loan is handled in its own unit of work under its owner's
        lock. A loan whose step fails is logged and left for the next
        sweep; the others are still processed. Loans that stopped being
        active since the snapshot are skipped, so re-running is safe.

        Returns:
            SweepResult with per-outcome counts
        """
        with track_autopay_sweep_latency():
            async with self._uow_factory() as uow:
                active = await uow.loans.get_active()

            logger.info("autopay_sweep_started", active_loans=len(active))

            paid = missed = skipped = errors = 0
            for snapshot in active:
                try:
                    outcome = await self._autopay_loan(snapshot)
                except Exception as e:
                    errors += 1
                    record_autopay_outcome("error")
                    logger.exception(
                        "autopay_loan_failed",
                        loan_id=snapshot.id,
                        owner_id=snapshot.owner_id,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    continue

                if outcome == AUTOPAY_PAID:
                    paid += 1
                elif outcome == AUTOPAY_MISSED:
                    missed += 1
                else:
                    skipped += 1

        result = SweepResult(
            processed=paid + missed,
            paid=paid,
            missed=missed,
            skipped=skipped,
            errors=errors,
        )
        record_autopay_sweep(result.processed)
        logger.info(
            "autopay_sweep_completed",
            processed=result.processed,
            paid=paid,
            missed=missed,
            skipped=skipped,
            errors=errors,
        )

        return result

    async def _autopay_loan(self, snapshot: Loan) -> Optional[str]:
        """
        Run the scheduled payment for one loan.

        Returns:
            AUTOPAY_PAID, AUTOPAY_MISSED, or None when the loan was skipped
        """
        log = logger.bind(loan_id=snapshot.id, owner_id=snapshot.owner_id)

        async with self._locks.hold(snapshot.owner_id):
            async with self._uow_factory() as uow:
                account = await uow.accounts.get_by_id(snapshot.owner_id, for_update=True)
                if account is None:
                    log.warning("autopay_owner_missing")
                    return None

                loan = await uow.loans.get_by_id(snapshot.id, for_update=True)
                if loan is None or not loan.is_active:
                    return None

                payment = autopay_amount_cents(
                    loan.principal_cents, loan.remaining_cents, self._settings
                )

                if not account.can_afford(payment):
                    account.credit_score = score_after_autopay(
                        account.credit_score, paid=False, settings=self._settings
                    )
                    await uow.accounts.update(account)
                    outcome = AUTOPAY_MISSED
                else:
                    account.balance_cents -= payment
                    loan.apply_payment(payment)
                    account.credit_score = score_after_autopay(
                        account.credit_score, paid=True, settings=self._settings
                    )
                    await uow.accounts.update(account)
                    await uow.loans.update(loan)
                    await uow.ledger.append(
                        LedgerEntry.loan_repayment(
                            account_id=account.id,
                            amount_cents=payment,
                            note=autopay_note(loan.id),
                        )
                    )
                    outcome = AUTOPAY_PAID

        record_autopay_outcome(outcome)
        if outcome == AUTOPAY_PAID:
            record_loan_repayment("auto", paid_off=not loan.is_active)
            log.info(
                "autopay_collected",
                payment=payment,
                remaining=loan.remaining_cents,
                credit_score=account.credit_score,
            )
        else:
            log.info(
                "autopay_missed",
                payment=payment,
                balance=account.balance_cents,
                credit_score=account.credit_score,
            )

        return outcome
