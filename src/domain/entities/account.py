"""Account entity representing a student or teacher bank account."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class AccountRole(str, Enum):
    """Role of an account holder."""

    STANDARD = "standard"
    ADMINISTRATOR = "administrator"


@dataclass
class Account:
    """
    A classroom bank account.

    Balances are held in cents and never go below zero. The credit score
    is kept within the configured bounds by the services that mutate it.
    """

    username: str
    role: AccountRole = AccountRole.STANDARD
    balance_cents: int = 0
    credit_score: int = 650
    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        """Check if this account may perform administrator actions."""
        return self.role == AccountRole.ADMINISTRATOR

    def can_afford(self, amount_cents: int) -> bool:
        return self.balance_cents >= amount_cents
