"""Ledger entry entity - the immutable record of a money movement."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class LedgerEntryKind(str, Enum):
    """Kind of money movement recorded in the ledger."""

    TRANSFER = "transfer"
    FINE = "fine"
    LOAN_DISBURSAL = "loan_disbursal"
    LOAN_REPAYMENT = "loan_repayment"


@dataclass(frozen=True)
class LedgerEntry:
    """
    Immutable record of one money movement.

    A missing from_account_id means the money came from the system
    (loan disbursal); a missing to_account_id means the system absorbed
    it (fine, loan repayment). The amount is always positive.

    Attributes:
        kind: What kind of movement this is
        amount_cents: Amount moved, in cents
        from_account_id: Debited account, None for system credits
        to_account_id: Credited account, None for system debits
        note: Human-readable description
        id: Store-assigned, monotonically increasing identifier
        created_at: Time the movement was recorded
    """

    kind: LedgerEntryKind
    amount_cents: int
    from_account_id: Optional[int] = None
    to_account_id: Optional[int] = None
    note: Optional[str] = None
    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        if self.amount_cents <= 0:
            raise ValueError(f"Ledger amount must be positive, got {self.amount_cents}")
        if self.from_account_id is None and self.to_account_id is None:
            raise ValueError("Ledger entry needs a source or a destination account")

    @classmethod
    def transfer(
        cls,
        sender_id: int,
        recipient_id: int,
        amount_cents: int,
        note: Optional[str] = None,
    ) -> "LedgerEntry":
        return cls(
            kind=LedgerEntryKind.TRANSFER,
            amount_cents=amount_cents,
            from_account_id=sender_id,
            to_account_id=recipient_id,
            note=note,
        )

    @classmethod
    def fine(cls, target_id: int, amount_cents: int, note: str) -> "LedgerEntry":
        return cls(
            kind=LedgerEntryKind.FINE,
            amount_cents=amount_cents,
            from_account_id=target_id,
            note=note,
        )

    @classmethod
    def loan_disbursal(cls, account_id: int, amount_cents: int, note: str) -> "LedgerEntry":
        return cls(
            kind=LedgerEntryKind.LOAN_DISBURSAL,
            amount_cents=amount_cents,
            to_account_id=account_id,
            note=note,
        )

    @classmethod
    def loan_repayment(cls, account_id: int, amount_cents: int, note: str) -> "LedgerEntry":
        return cls(
            kind=LedgerEntryKind.LOAN_REPAYMENT,
            amount_cents=amount_cents,
            from_account_id=account_id,
            note=note,
        )

    def involves(self, account_id: int) -> bool:
        """Check if the account is on either side of this movement."""
        return account_id in (self.from_account_id, self.to_account_id)
