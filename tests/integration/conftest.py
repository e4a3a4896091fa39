"""
Fixtures for integration tests.

Provides:
- In-memory SQLite database shared by every unit of work in a test
- Test client for the FastAPI app with the unit of work overridden
- Seeded administrator and student accounts with their caller headers
"""

from functools import partial
from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.core.dependencies import get_account_locks, get_unit_of_work_factory
from src.domain.entities import Account, AccountRole
from src.infrastructure.database import Base, db_manager
from src.infrastructure.locks import AccountLockRegistry
from src.infrastructure.repositories import SqlAlchemyUnitOfWork


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def test_sessionmaker(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest.fixture
def uow_factory(test_sessionmaker):
    """Unit of work factory bound to the test database."""
    return partial(SqlAlchemyUnitOfWork, test_sessionmaker)


async def create_account(
    uow_factory,
    username: str,
    role: AccountRole = AccountRole.STANDARD,
    balance_cents: int = 100_000,
    credit_score: int = 650,
) -> Account:
    async with uow_factory() as uow:
        return await uow.accounts.add(
            Account(
                username=username,
                role=role,
                balance_cents=balance_cents,
                credit_score=credit_score,
            )
        )


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(test_engine, uow_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with the database overridden.

    This client:
    - Uses an in-memory SQLite database
    - Uses a fresh lock registry per test
    - Does not run the lifespan, so no scheduler task is started
    """
    locks = AccountLockRegistry()

    app.dependency_overrides[get_unit_of_work_factory] = lambda: uow_factory
    app.dependency_overrides[get_account_locks] = lambda: locks
    db_manager.bind(test_engine)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Account Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def admin(uow_factory) -> Account:
    return await create_account(
        uow_factory, "Panda43", AccountRole.ADMINISTRATOR, 1_000_000, 850
    )


@pytest_asyncio.fixture
async def student(uow_factory) -> Account:
    return await create_account(uow_factory, "Lion12", balance_cents=10_000)


@pytest_asyncio.fixture
async def classmate(uow_factory) -> Account:
    return await create_account(uow_factory, "Zebra34", balance_cents=0)


def headers_for(account: Account) -> Dict[str, str]:
    return {"X-Account-ID": str(account.id)}


@pytest.fixture
def admin_headers(admin) -> Dict[str, str]:
    return headers_for(admin)


@pytest.fixture
def student_headers(student) -> Dict[str, str]:
    return headers_for(student)


@pytest.fixture
def classmate_headers(classmate) -> Dict[str, str]:
    return headers_for(classmate)


@pytest.fixture
def make_account(uow_factory):
    """Create an account directly in the test database."""
    async def _make(username: str, **kwargs) -> Account:
        return await create_account(uow_factory, username, **kwargs)
    return _make
