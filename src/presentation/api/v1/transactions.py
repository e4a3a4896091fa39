"""Money movement and ledger history endpoints."""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.application.dto import FineRequest, TransferRequest
from src.application.services import AccountService, LedgerService
from src.core.config import MAX_STORED_INT
from src.core.dependencies import (
    get_account_service,
    get_caller_id,
    get_ledger_service,
)
from src.presentation.schemas import (
    ErrorResponseSchema,
    FineRequestSchema,
    FineResponseSchema,
    LedgerEntrySchema,
    LedgerHistorySchema,
    TransferRequestSchema,
)

transactions_router = APIRouter(
    prefix="/transactions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Missing caller identity"},
        404: {"model": ErrorResponseSchema, "description": "Account not found"},
    },
)


@transactions_router.post(
    "/transfer",
    response_model=LedgerEntrySchema,
    status_code=201,
    summary="Transfer Money",
    description="Move money from the caller's account to another account.",
    responses={
        201: {"description": "Transfer recorded"},
        402: {"model": ErrorResponseSchema, "description": "Insufficient funds"},
    },
)
async def transfer(
    request: TransferRequestSchema,
    caller_id: Annotated[int, Depends(get_caller_id)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> LedgerEntrySchema:
    dto = TransferRequest(
        sender_id=caller_id,
        recipient_id=request.recipient_id,
        amount_cents=request.amount_cents,
        note=request.note,
    )

    entry = await account_service.transfer(dto)

    return LedgerEntrySchema(**asdict(entry))


@transactions_router.post(
    "/fine",
    response_model=FineResponseSchema,
    status_code=201,
    summary="Issue Fine",
    description="""
    Fine an account (administrators only).

    The amount collected is capped at the account's balance; the credit
    score penalty applies in full.
    """,
    responses={
        201: {"description": "Fine issued"},
        403: {"model": ErrorResponseSchema, "description": "Caller is not an administrator"},
    },
)
async def issue_fine(
    request: FineRequestSchema,
    caller_id: Annotated[int, Depends(get_caller_id)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> FineResponseSchema:
    dto = FineRequest(
        admin_id=caller_id,
        target_id=request.target_id,
        amount_cents=request.amount_cents,
        reason=request.reason,
    )

    response = await account_service.issue_fine(dto)

    return FineResponseSchema(**asdict(response))


@transactions_router.get(
    "",
    response_model=LedgerHistorySchema,
    summary="Get Transaction History",
    description="Retrieve the caller's ledger entries, newest first.",
)
async def get_my_transactions(
    caller_id: Annotated[int, Depends(get_caller_id)],
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
    limit: Annotated[
        int,
        Query(ge=1, le=200, description="Maximum number of entries to return"),
    ] = 50,
    offset: Annotated[
        int,
        Query(ge=0, le=MAX_STORED_INT, description="Entries to skip"),
    ] = 0,
) -> LedgerHistorySchema:
    response = await ledger_service.get_history(caller_id, limit=limit, offset=offset)

    return LedgerHistorySchema(**asdict(response))
