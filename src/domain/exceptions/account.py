"""Account-related domain exceptions."""

from .base import DomainException


class AccountNotFoundException(DomainException):
    """Raised when a referenced account does not exist."""

    def __init__(self, account_id: int):
        super().__init__(
            message=f"Account not found: {account_id}",
            code="ACCOUNT_NOT_FOUND",
        )
        self.account_id = account_id


class InsufficientFundsException(DomainException):
    """Raised when an account balance cannot cover a debit."""

    def __init__(self, account_id: int, balance_cents: int, required_cents: int):
        super().__init__(
            message="Insufficient funds",
            code="INSUFFICIENT_FUNDS",
        )
        self.account_id = account_id
        self.balance_cents = balance_cents
        self.required_cents = required_cents


class ForbiddenOperationException(DomainException):
    """Raised when the caller's role does not allow the operation."""

    def __init__(self, message: str = "Operation not permitted"):
        super().__init__(
            message=message,
            code="FORBIDDEN",
        )


class UnauthenticatedException(DomainException):
    """Raised when no usable caller identity accompanies a request."""

    def __init__(self, message: str = "Caller identity is missing or malformed"):
        super().__init__(
            message=message,
            code="UNAUTHENTICATED",
        )
