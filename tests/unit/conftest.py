"""
Fixtures for unit tests.

Provides:
- In-memory unit of work that commits on success and discards on error
- Account, loan and ledger services wired to it
- Helpers to place accounts and loans directly into the store
"""

import asyncio
import itertools
from dataclasses import replace
from typing import Dict, List, Optional

import pytest

from src.application.services import AccountService, LedgerService, LoanService
from src.domain.entities import Account, AccountRole, LedgerEntry, Loan, LoanStatus
from src.domain.interfaces import (
    AccountRepository,
    LedgerRepository,
    LoanRepository,
    UnitOfWork,
)
from src.infrastructure.locks import AccountLockRegistry
from src.service.rules import BankingRulesSettings


# =============================================================================
# In-Memory Store
# =============================================================================

class InMemoryStore:
    """Committed state shared by all units of work."""

    def __init__(self):
        self.accounts: Dict[int, Account] = {}
        self.loans: Dict[int, Loan] = {}
        self.ledger: List[LedgerEntry] = []
        self.account_ids = itertools.count(1)
        self.loan_ids = itertools.count(1)
        self.entry_ids = itertools.count(1)
        self.broken_loan_ids: set = set()
        self.reads: List[tuple] = []
        self.commits = 0
        self.rollbacks = 0

    def total_balance(self) -> int:
        return sum(a.balance_cents for a in self.accounts.values())


class InMemoryAccountRepository(AccountRepository):
    def __init__(self, store: InMemoryStore, pending: Dict[int, Account]):
        self._store = store
        self._pending = pending

    def _merged(self) -> Dict[int, Account]:
        merged = dict(self._store.accounts)
        merged.update(self._pending)
        return merged

    async def add(self, account: Account) -> Account:
        account.id = next(self._store.account_ids)
        self._pending[account.id] = replace(account)
        return account

    async def get_by_id(self, account_id: int, for_update: bool = False) -> Optional[Account]:
        # Yield so that concurrent operations interleave
        await asyncio.sleep(0)
        self._store.reads.append(("account", account_id, for_update))
        account = self._merged().get(account_id)
        return replace(account) if account else None

    async def get_by_username(self, username: str) -> Optional[Account]:
        for account in self._merged().values():
            if account.username == username:
                return replace(account)
        return None

    async def list_all(self) -> List[Account]:
        accounts = sorted(self._merged().values(), key=lambda a: a.username)
        return [replace(a) for a in accounts]

    async def update(self, account: Account) -> Account:
        if account.id not in self._merged():
            raise ValueError(f"Account {account.id} not found")
        self._pending[account.id] = replace(account)
        return account

    async def count(self) -> int:
        return len(self._merged())


class InMemoryLedgerRepository(LedgerRepository):
    def __init__(self, store: InMemoryStore, pending: List[LedgerEntry]):
        self._store = store
        self._pending = pending

    async def append(self, entry: LedgerEntry) -> LedgerEntry:
        stored = replace(entry, id=next(self._store.entry_ids))
        self._pending.append(stored)
        return stored

    async def get_for_account(
        self,
        account_id: int,
        limit: int = 50,
        offset: int = 0,
    ) -> List[LedgerEntry]:
        entries = [e for e in self._store.ledger + self._pending if e.involves(account_id)]
        entries.sort(key=lambda e: e.id, reverse=True)
        return entries[offset:offset + limit]


class InMemoryLoanRepository(LoanRepository):
    def __init__(self, store: InMemoryStore, pending: Dict[int, Loan]):
        self._store = store
        self._pending = pending

    def _merged(self) -> Dict[int, Loan]:
        merged = dict(self._store.loans)
        merged.update(self._pending)
        return merged

    async def add(self, loan: Loan) -> Loan:
        loan.id = next(self._store.loan_ids)
        self._pending[loan.id] = replace(loan)
        return loan

    async def get_by_id(self, loan_id: int, for_update: bool = False) -> Optional[Loan]:
        await asyncio.sleep(0)
        self._store.reads.append(("loan", loan_id, for_update))
        if loan_id in self._store.broken_loan_ids:
            raise RuntimeError(f"storage failure reading loan {loan_id}")
        loan = self._merged().get(loan_id)
        return replace(loan) if loan else None

    async def get_by_owner(self, owner_id: int) -> List[Loan]:
        loans = [l for l in self._merged().values() if l.owner_id == owner_id]
        loans.sort(key=lambda l: l.id, reverse=True)
        return [replace(l) for l in loans]

    async def get_active(self) -> List[Loan]:
        loans = [l for l in self._merged().values() if l.status == LoanStatus.ACTIVE]
        loans.sort(key=lambda l: l.id)
        return [replace(l) for l in loans]

    async def update(self, loan: Loan) -> Loan:
        self._pending[loan.id] = replace(loan)
        return loan


class InMemoryUnitOfWork(UnitOfWork):
    """Buffers writes and applies them to the store only on commit."""

    def __init__(self, store: InMemoryStore):
        self._store = store

    async def begin(self) -> None:
        self._accounts: Dict[int, Account] = {}
        self._loans: Dict[int, Loan] = {}
        self._entries: List[LedgerEntry] = []
        self.accounts = InMemoryAccountRepository(self._store, self._accounts)
        self.ledger = InMemoryLedgerRepository(self._store, self._entries)
        self.loans = InMemoryLoanRepository(self._store, self._loans)

    async def commit(self) -> None:
        self._store.accounts.update(self._accounts)
        self._store.loans.update(self._loans)
        self._store.ledger.extend(self._entries)
        self._store.commits += 1

    async def rollback(self) -> None:
        self._store.rollbacks += 1


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow_factory(store: InMemoryStore):
    return lambda: InMemoryUnitOfWork(store)


@pytest.fixture
def rules() -> BankingRulesSettings:
    """Default rules, independent of the environment."""
    return BankingRulesSettings(_env_file=None)


@pytest.fixture
def locks() -> AccountLockRegistry:
    return AccountLockRegistry()


@pytest.fixture
def account_service(uow_factory, locks, rules) -> AccountService:
    return AccountService(uow_factory=uow_factory, locks=locks, settings=rules)


@pytest.fixture
def loan_service(uow_factory, locks, rules) -> LoanService:
    return LoanService(uow_factory=uow_factory, locks=locks, settings=rules)


@pytest.fixture
def ledger_service(uow_factory) -> LedgerService:
    return LedgerService(uow_factory=uow_factory)


def put_account(
    store: InMemoryStore,
    username: str,
    balance_cents: int = 0,
    credit_score: int = 650,
    role: AccountRole = AccountRole.STANDARD,
) -> Account:
    """Place a committed account straight into the store."""
    account = Account(
        id=next(store.account_ids),
        username=username,
        role=role,
        balance_cents=balance_cents,
        credit_score=credit_score,
    )
    store.accounts[account.id] = account
    return account


def put_loan(
    store: InMemoryStore,
    owner: Account,
    principal_cents: int,
    remaining_cents: Optional[int] = None,
) -> Loan:
    """Place a committed, active loan straight into the store."""
    loan = Loan(
        id=next(store.loan_ids),
        owner_id=owner.id,
        principal_cents=principal_cents,
        remaining_cents=principal_cents if remaining_cents is None else remaining_cents,
    )
    store.loans[loan.id] = loan
    return loan


@pytest.fixture
def make_account(store: InMemoryStore):
    def _make(username: str, balance_cents: int = 0, credit_score: int = 650, role=AccountRole.STANDARD):
        return put_account(store, username, balance_cents, credit_score, role)
    return _make


@pytest.fixture
def make_loan(store: InMemoryStore):
    def _make(owner: Account, principal_cents: int, remaining_cents: Optional[int] = None):
        return put_loan(store, owner, principal_cents, remaining_cents)
    return _make
