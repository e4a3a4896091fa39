"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Account, LedgerEntry, Loan


class AccountRepository(ABC):
    """
    Abstract repository for Account persistence.

    Implementations may use PostgreSQL, SQLite, in-memory storage, etc.
    """

    @abstractmethod
    async def add(self, account: Account) -> Account:
        """
        Persist a new account.

        Args:
            account: The account to save

        Returns:
            The saved account with its id populated
        """
        ...

    @abstractmethod
    async def get_by_id(self, account_id: int, for_update: bool = False) -> Optional[Account]:
        """
        Retrieve an account by ID.

        Args:
            account_id: The account's identifier
            for_update: Lock the row until the surrounding unit of work ends,
                where the backend supports row locks

        Returns:
            The account if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[Account]:
        """Retrieve an account by its unique username."""
        ...

    @abstractmethod
    async def list_all(self) -> List[Account]:
        """Retrieve every account, ordered by username."""
        ...

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """
        Write back the balance and credit score of an existing account.

        Args:
            account: The account to update

        Returns:
            The updated account
        """
        ...

    @abstractmethod
    async def count(self) -> int:
        """Count stored accounts."""
        ...


class LedgerRepository(ABC):
    """
    Abstract repository for the append-only ledger.

    There is no update or delete: entries are written once.
    """

    @abstractmethod
    async def append(self, entry: LedgerEntry) -> LedgerEntry:
        """
        Append an entry to the ledger.

        Args:
            entry: The entry to record

        Returns:
            The stored entry with its id populated
        """
        ...

    @abstractmethod
    async def get_for_account(
        self,
        account_id: int,
        limit: int = 50,
        offset: int = 0,
    ) -> List[LedgerEntry]:
        """
        Retrieve entries where the account is sender or recipient.

        Args:
            account_id: The account's identifier
            limit: Maximum number of entries to return
            offset: Number of entries to skip

        Returns:
            List of entries, newest first
        """
        ...


class LoanRepository(ABC):
    """Abstract repository for Loan persistence."""

    @abstractmethod
    async def add(self, loan: Loan) -> Loan:
        """Persist a new loan and populate its id."""
        ...

    @abstractmethod
    async def get_by_id(self, loan_id: int, for_update: bool = False) -> Optional[Loan]:
        """
        Retrieve a loan by ID.

        Args:
            loan_id: The loan's identifier
            for_update: Lock the row until the surrounding unit of work ends,
                where the backend supports row locks

        Returns:
            The loan if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_owner(self, owner_id: int) -> List[Loan]:
        """Retrieve all loans for an account, newest first."""
        ...

    @abstractmethod
    async def get_active(self) -> List[Loan]:
        """Retrieve every active loan, oldest first."""
        ...

    @abstractmethod
    async def update(self, loan: Loan) -> Loan:
        """Write back the remaining balance and status of a loan."""
        ...
