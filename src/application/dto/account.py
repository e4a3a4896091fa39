"""Data transfer objects for account and money-movement operations."""

from dataclasses import dataclass
from typing import List, Optional

from src.domain.entities import Account, AccountRole

from .ledger import LedgerEntryResponse


@dataclass(frozen=True)
class TransferRequest:
    """Input data for moving money between two accounts."""
    sender_id: int
    recipient_id: int
    amount_cents: int
    note: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if self.amount_cents <= 0:
            errors.append("amount_cents must be positive")

        if self.sender_id == self.recipient_id:
            errors.append("cannot transfer to the same account")

        return errors


@dataclass(frozen=True)
class FineRequest:
    """Input data for an administrator fining an account."""
    admin_id: int
    target_id: int
    amount_cents: int
    reason: str

    def validate(self) -> List[str]:
        errors = []

        if self.amount_cents <= 0:
            errors.append("amount_cents must be positive")

        if not self.reason or not self.reason.strip():
            errors.append("reason is required")

        return errors


@dataclass(frozen=True)
class OpenAccountRequest:
    """Input data for provisioning a new account."""
    admin_id: int
    username: str
    role: AccountRole = AccountRole.STANDARD

    def validate(self) -> List[str]:
        errors = []

        if not self.username or not self.username.strip():
            errors.append("username is required")

        return errors


@dataclass(frozen=True)
class AccountResponse:
    """Full account view (owner or administrator)."""

    account_id: int
    username: str
    role: str
    balance_cents: int
    credit_score: int
    created_at: str

    @classmethod
    def from_entity(cls, account: Account) -> "AccountResponse":
        return cls(
            account_id=account.id,
            username=account.username,
            role=account.role.value,
            balance_cents=account.balance_cents,
            credit_score=account.credit_score,
            created_at=account.created_at.isoformat() + "Z",
        )


@dataclass(frozen=True)
class AccountSummary:
    """Directory listing entry, without balance or score."""

    account_id: int
    username: str
    role: str

    @classmethod
    def from_entity(cls, account: Account) -> "AccountSummary":
        return cls(
            account_id=account.id,
            username=account.username,
            role=account.role.value,
        )


@dataclass(frozen=True)
class FineResponse:
    """
    Outcome of a fine.

    Fines are capped at the target's balance; entry is None when the
    target had nothing to collect.
    """

    account: AccountResponse
    amount_levied_cents: int
    amount_collected_cents: int
    entry: Optional[LedgerEntryResponse]
