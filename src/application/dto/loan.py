"""Data transfer objects for loan operations."""

from dataclasses import dataclass
from typing import List

from src.domain.entities import Loan


@dataclass(frozen=True)
class LoanApplicationRequest:
    """Input data for applying for a loan."""
    account_id: int
    amount_cents: int

    def validate(self) -> List[str]:
        errors = []

        if self.amount_cents <= 0:
            errors.append("amount_cents must be positive")

        return errors


@dataclass(frozen=True)
class RepaymentRequest:
    """Input data for a manual loan repayment."""
    account_id: int
    loan_id: int
    amount_cents: int

    def validate(self) -> List[str]:
        errors = []

        if self.amount_cents <= 0:
            errors.append("amount_cents must be positive")

        return errors


@dataclass(frozen=True)
class LoanResponse:
    """Response data for a loan."""

    loan_id: int
    owner_id: int
    principal_cents: int
    remaining_cents: int
    rate: int
    status: str
    created_at: str

    @classmethod
    def from_entity(cls, loan: Loan) -> "LoanResponse":
        return cls(
            loan_id=loan.id,
            owner_id=loan.owner_id,
            principal_cents=loan.principal_cents,
            remaining_cents=loan.remaining_cents,
            rate=loan.rate,
            status=loan.status.value,
            created_at=loan.created_at.isoformat() + "Z",
        )


@dataclass(frozen=True)
class SweepResult:
    """
    Summary of one auto-pay sweep.

    processed = paid + missed: loans whose scheduled payment was either
    collected or missed. skipped counts loans that were no longer active
    by the time their turn came; errors counts loans whose step raised
    and is left for the next run.
    """

    processed: int
    paid: int
    missed: int
    skipped: int = 0
    errors: int = 0
