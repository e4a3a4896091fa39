from fastapi import APIRouter

from .accounts import accounts_router
from .admin import admin_router
from .health import health_router
from .loans import loans_router
from .transactions import transactions_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(accounts_router, tags=["Accounts"])
router.include_router(transactions_router, tags=["Transactions"])
router.include_router(loans_router, tags=["Loans"])
router.include_router(admin_router, tags=["Admin"])
