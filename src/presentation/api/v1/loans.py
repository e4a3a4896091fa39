"""Loan endpoints."""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Path

from src.application.dto import LoanApplicationRequest, RepaymentRequest
from src.application.services import LoanService
from src.core.config import MAX_STORED_INT
from src.core.dependencies import get_caller_id, get_loan_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    LoanApplicationSchema,
    LoanSchema,
    RepaymentSchema,
)

loans_router = APIRouter(
    prefix="/loans",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Missing caller identity"},
        404: {"model": ErrorResponseSchema, "description": "Account or loan not found"},
    },
)


@loans_router.get(
    "",
    response_model=list[LoanSchema],
    summary="List My Loans",
)
async def list_loans(
    caller_id: Annotated[int, Depends(get_caller_id)],
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> list[LoanSchema]:
    loans = await loan_service.list_loans(caller_id)
    return [LoanSchema(**asdict(loan)) for loan in loans]


@loans_router.post(
    "",
    response_model=LoanSchema,
    status_code=201,
    summary="Apply For Loan",
    description="""
    Borrow money from the bank. The largest allowed amount depends on the
    caller's credit score; the principal is credited immediately.
    """,
    responses={
        201: {"description": "Loan approved and disbursed"},
        400: {
            "model": ErrorResponseSchema,
            "description": "Amount above the ceiling (max_amount_cents included)",
        },
    },
)
async def apply_for_loan(
    request: LoanApplicationSchema,
    caller_id: Annotated[int, Depends(get_caller_id)],
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> LoanSchema:
    dto = LoanApplicationRequest(account_id=caller_id, amount_cents=request.amount_cents)

    response = await loan_service.apply_for_loan(dto)

    return LoanSchema(**asdict(response))


@loans_router.post(
    "/{loan_id}/repay",
    response_model=LoanSchema,
    summary="Repay Loan",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid amount or loan closed"},
        402: {"model": ErrorResponseSchema, "description": "Insufficient funds"},
    },
)
async def repay_loan(
    loan_id: Annotated[int, Path(gt=0, le=MAX_STORED_INT, description="Loan to repay")],
    request: RepaymentSchema,
    caller_id: Annotated[int, Depends(get_caller_id)],
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> LoanSchema:
    dto = RepaymentRequest(
        account_id=caller_id,
        loan_id=loan_id,
        amount_cents=request.amount_cents,
    )

    response = await loan_service.repay_loan(dto)

    return LoanSchema(**asdict(response))
