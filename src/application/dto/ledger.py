"""Data transfer objects for ledger history."""

from dataclasses import dataclass
from typing import List, Optional

from src.domain.entities import LedgerEntry


@dataclass(frozen=True)
class LedgerEntryResponse:
    """One ledger entry as returned to callers."""

    entry_id: int
    kind: str
    amount_cents: int
    from_account_id: Optional[int]
    to_account_id: Optional[int]
    note: Optional[str]
    created_at: str

    @classmethod
    def from_entity(cls, entry: LedgerEntry) -> "LedgerEntryResponse":
        return cls(
            entry_id=entry.id,
            kind=entry.kind.value,
            amount_cents=entry.amount_cents,
            from_account_id=entry.from_account_id,
            to_account_id=entry.to_account_id,
            note=entry.note,
            created_at=entry.created_at.isoformat() + "Z",
        )


@dataclass(frozen=True)
class LedgerHistoryResponse:
    """An account's ledger history, newest first."""

    account_id: int
    entries: List[LedgerEntryResponse]

    @classmethod
    def from_entities(cls, account_id: int, entries: list) -> "LedgerHistoryResponse":
        return cls(
            account_id=account_id,
            entries=[LedgerEntryResponse.from_entity(e) for e in entries],
        )
