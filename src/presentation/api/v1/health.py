"""Health check endpoint for service monitoring."""

import structlog
from fastapi import APIRouter
from pydantic import BaseModel

from src import __version__
from src.infrastructure.database import db_manager

logger = structlog.get_logger(__name__)

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    database: str = "ok"


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the service and its database.",
)
async def health_check() -> HealthResponse:
    try:
        reachable = await db_manager.ping()
    except Exception as e:
        logger.warning("health_database_unreachable", error=str(e))
        reachable = False

    if not reachable:
        return HealthResponse(status="degraded", version=__version__, database="unavailable")

    return HealthResponse(status="healthy", version=__version__)
