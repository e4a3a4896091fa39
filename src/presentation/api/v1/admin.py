"""Administrator operations."""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.scheduler import AutoRepayScheduler
from src.application.services import AccountService
from src.core.dependencies import (
    get_account_service,
    get_autopay_scheduler,
    get_caller_id,
)
from src.presentation.schemas import ErrorResponseSchema, SweepResultSchema

admin_router = APIRouter(
    prefix="/admin",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Missing caller identity"},
        403: {"model": ErrorResponseSchema, "description": "Caller is not an administrator"},
    },
)


@admin_router.post(
    "/autopay/run",
    response_model=SweepResultSchema,
    summary="Run Auto-Pay Now",
    description="Run one auto-pay sweep over every active loan immediately.",
)
async def run_autopay(
    caller_id: Annotated[int, Depends(get_caller_id)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
    scheduler: Annotated[AutoRepayScheduler, Depends(get_autopay_scheduler)],
) -> SweepResultSchema:
    await account_service.authorize_admin(caller_id, "run auto-pay")

    result = await scheduler.run_once()

    return SweepResultSchema(**asdict(result))
