"""Error handling middleware and exception handlers."""

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    DomainException,
    AccountNotFoundException,
    ForbiddenOperationException,
    InsufficientFundsException,
    InvalidInputException,
    LoanDeniedException,
    LoanNotFoundException,
    UnauthenticatedException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

# Most specific first; the first match wins
STATUS_BY_EXCEPTION = (
    (AccountNotFoundException, 404),
    (LoanNotFoundException, 404),
    (ForbiddenOperationException, 403),
    (InsufficientFundsException, 402),
    (UnauthenticatedException, 401),
    (LoanDeniedException, 400),
    (InvalidInputException, 400),
)


def status_for(exc: DomainException) -> int:
    for exc_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return 400


def error_body(code: str, message: str, **extra: Any) -> Dict[str, Any]:
    body = {
        "error": code,
        "message": message,
        "request_id": get_request_id(),
    }
    body.update(extra)
    return body


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(LoanDeniedException)
    async def loan_denied_handler(
        request: Request,
        exc: LoanDeniedException,
    ) -> JSONResponse:
        """Handle loan denials, telling the caller the ceiling."""
        return JSONResponse(
            status_code=400,
            content=error_body(
                exc.code,
                exc.message,
                max_amount_cents=exc.max_amount_cents,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle malformed request bodies and parameters."""
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
            for err in errors
        )
        logger.info(
            "request_validation_failed",
            request_id=get_request_id(),
            error_count=len(errors),
        )
        return JSONResponse(
            status_code=400,
            content=error_body("INVALID_INPUT", message or "Invalid request"),
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle domain exceptions."""
        status_code = status_for(exc)
        log = logger.warning if status_code >= 403 else logger.info
        log(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
            status_code=status_code,
        )
        return JSONResponse(
            status_code=status_code,
            content=error_body(exc.code, exc.message),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("INTERNAL_ERROR", "An unexpected error occurred."),
        )
