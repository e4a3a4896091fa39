"""Loan domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class LoanStatus(str, Enum):
    ACTIVE = "active"
    PAID = "paid"
    # No rule assigns this yet.
    DEFAULTED = "defaulted"


@dataclass
class Loan:
    """A classroom loan owned by one account."""

    owner_id: int
    principal_cents: int
    remaining_cents: int
    rate: int = 5
    status: LoanStatus = LoanStatus.ACTIVE
    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == LoanStatus.ACTIVE

    def apply_payment(self, amount_cents: int) -> None:
        """
        Reduce the outstanding balance by a payment.

        The balance floors at zero and the loan becomes paid the moment
        it gets there. Paid loans never return to active.
        """
        self.remaining_cents = max(0, self.remaining_cents - amount_cents)
        if self.remaining_cents == 0:
            self.status = LoanStatus.PAID
