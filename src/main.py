"""
Classbank - Main Application Entry Point

A classroom play-money bank: students hold accounts, send each other
money, take out loans from the bank and build a credit score; teachers
administer accounts and issue fines.
"""

from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from src import __version__
from src.application.scheduler import AutoRepayScheduler
from src.application.seed import seed_demo_accounts
from src.application.services import LoanService
from src.core.config import settings
from src.core.dependencies import account_locks
from src.core.logging import setup_logging
from src.core.metrics import get_metrics, get_metrics_content_type
from src.infrastructure.database import db_manager
from src.infrastructure.repositories import SqlAlchemyUnitOfWork
from src.presentation.api import api_router
from src.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)
from src.service.rules import get_rules_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Set up logging
    - Initialize the database and create missing tables
    - Seed the demo roster into an empty store
    - Start and stop the auto-pay scheduler
    """
    setup_logging()
    db_manager.init()

    logger = structlog.get_logger(__name__)

    if settings.db_create_tables:
        await db_manager.create_all()

    uow_factory = partial(SqlAlchemyUnitOfWork, db_manager.sessionmaker)
    rules = get_rules_settings()

    if settings.seed_demo_accounts:
        created = await seed_demo_accounts(uow_factory, rules)
        if created:
            logger.info("demo_roster_created", accounts=created)

    loan_service = LoanService(uow_factory=uow_factory, locks=account_locks, settings=rules)
    scheduler = AutoRepayScheduler(
        sweep=loan_service.auto_repay_sweep,
        interval_seconds=settings.autopay_interval_seconds,
    )
    app.state.autopay_scheduler = scheduler
    if settings.autopay_enabled:
        scheduler.start()

    logger.info(
        "application_started",
        version=__version__,
        autopay_enabled=settings.autopay_enabled,
    )

    yield

    await scheduler.stop()
    app.state.autopay_scheduler = None
    await db_manager.close()
    logger.info("application_stopped")


app = FastAPI(
    title="Classbank",
    description="Classroom play-money bank: transfers, fines, loans and credit scores",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
