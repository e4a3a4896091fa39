"""Loan-related domain exceptions."""

from .base import DomainException


class LoanNotFoundException(DomainException):
    """Raised when a loan cannot be found for the caller."""

    def __init__(self, loan_id: int):
        super().__init__(
            message=f"Loan not found: {loan_id}",
            code="LOAN_NOT_FOUND",
        )
        self.loan_id = loan_id


class LoanDeniedException(DomainException):
    """Raised when a loan application exceeds the eligibility ceiling."""

    def __init__(self, max_amount_cents: int):
        if max_amount_cents == 0:
            message = "Your credit score is too low for a loan."
        else:
            message = (
                "Based on your credit score, the maximum loan you can take "
                f"is ${max_amount_cents / 100:,.2f}."
            )
        super().__init__(
            message=message,
            code="LOAN_DENIED",
        )
        self.max_amount_cents = max_amount_cents
