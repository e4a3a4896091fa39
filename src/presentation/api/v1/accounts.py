"""Account inspection and provisioning endpoints."""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from src.application.dto import OpenAccountRequest
from src.application.services import AccountService, LedgerService
from src.core.config import MAX_STORED_INT
from src.core.dependencies import (
    get_account_service,
    get_caller_id,
    get_ledger_service,
)
from src.domain.entities import AccountRole
from src.presentation.schemas import (
    AccountSchema,
    AccountSummarySchema,
    ErrorResponseSchema,
    LedgerHistorySchema,
    OpenAccountRequestSchema,
)

accounts_router = APIRouter(
    prefix="/accounts",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Missing caller identity"},
        403: {"model": ErrorResponseSchema, "description": "Not allowed for this caller"},
        404: {"model": ErrorResponseSchema, "description": "Account not found"},
    },
)


@accounts_router.get(
    "/me",
    response_model=AccountSchema,
    summary="Get My Account",
)
async def get_my_account(
    caller_id: Annotated[int, Depends(get_caller_id)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> AccountSchema:
    response = await account_service.get_account(caller_id, caller_id)
    return AccountSchema(**asdict(response))


@accounts_router.get(
    "/directory",
    response_model=list[AccountSummarySchema],
    summary="List Recipients",
    description="Names of all accounts, for choosing a transfer recipient.",
)
async def get_directory(
    caller_id: Annotated[int, Depends(get_caller_id)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> list[AccountSummarySchema]:
    summaries = await account_service.get_directory(caller_id)
    return [AccountSummarySchema(**asdict(s)) for s in summaries]


@accounts_router.get(
    "",
    response_model=list[AccountSchema],
    summary="List All Accounts",
    description="Every account with balance and credit score (administrators only).",
)
async def list_accounts(
    caller_id: Annotated[int, Depends(get_caller_id)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> list[AccountSchema]:
    accounts = await account_service.list_accounts(caller_id)
    return [AccountSchema(**asdict(a)) for a in accounts]


@accounts_router.post(
    "",
    response_model=AccountSchema,
    status_code=201,
    summary="Open Account",
    description="Provision a new account with its role's opening balance (administrators only).",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid or duplicate username"},
    },
)
async def open_account(
    request: OpenAccountRequestSchema,
    caller_id: Annotated[int, Depends(get_caller_id)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> AccountSchema:
    dto = OpenAccountRequest(
        admin_id=caller_id,
        username=request.username,
        role=AccountRole(request.role),
    )

    response = await account_service.open_account(dto)

    return AccountSchema(**asdict(response))


@accounts_router.get(
    "/{account_id}",
    response_model=AccountSchema,
    summary="Get Account",
    description="Callers may read their own account; administrators may read any.",
)
async def get_account(
    account_id: Annotated[
        int,
        Path(gt=0, le=MAX_STORED_INT, description="Account to retrieve"),
    ],
    caller_id: Annotated[int, Depends(get_caller_id)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> AccountSchema:
    response = await account_service.get_account(caller_id, account_id)
    return AccountSchema(**asdict(response))


@accounts_router.get(
    "/{account_id}/transactions",
    response_model=LedgerHistorySchema,
    summary="Get Account Transactions",
    description="Ledger history of an account, newest first (self or administrator).",
)
async def get_account_transactions(
    account_id: Annotated[
        int,
        Path(gt=0, le=MAX_STORED_INT, description="Account whose history to read"),
    ],
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
    response = await ledger_service.get_history(
        caller_id, account_id=account_id, limit=limit, offset=offset
    )
    return LedgerHistorySchema(**asdict(response))
