"""Input validation exceptions."""

from .base import DomainException


class InvalidInputException(DomainException):
    """Raised when a command carries a non-positive amount or a bad reference."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_INPUT",
        )
