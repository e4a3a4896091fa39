"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .account import (
    AccountNotFoundException,
    ForbiddenOperationException,
    InsufficientFundsException,
    UnauthenticatedException,
)
from .loan import LoanDeniedException, LoanNotFoundException
from .validation import InvalidInputException

__all__ = [
    "DomainException",
    "AccountNotFoundException",
    "ForbiddenOperationException",
    "InsufficientFundsException",
    "UnauthenticatedException",
    "LoanDeniedException",
    "LoanNotFoundException",
    "InvalidInputException",
]
